"""Property-based tests for the declared dependencies in pyproject.toml."""

import re
from pathlib import Path

import tomli
from hypothesis import given
from hypothesis import strategies as st

PYPROJECT_PATH = Path(__file__).parent.parent.parent / "pyproject.toml"

# Distribution names for the libraries the package imports
RUNTIME_LIBRARIES = ["pydantic", "typer", "rich", "kubernetes", "ruamel.yaml", "pyyaml", "requests"]

DEPENDENCY_PATTERN = re.compile(
    r"^[a-zA-Z0-9]([a-zA-Z0-9._-]*[a-zA-Z0-9])?"  # package name
    r"(\[[a-zA-Z0-9,_-]+\])?"  # optional extras
    r"(([><=!~]+[0-9][a-zA-Z0-9.*+-]*(,[><=!~]+[0-9][a-zA-Z0-9.*+-]*)*)?)?$"  # version specs
)


def load_pyproject_toml() -> dict:
    with open(PYPROJECT_PATH, "rb") as f:
        return tomli.load(f)


def is_valid_dependency(dep: str) -> bool:
    """Check a dependency string against the PEP 508 subset used here."""
    return bool(DEPENDENCY_PATTERN.match(dep.strip()))


def package_name(dep: str) -> str:
    return re.split(r"[><=!~\[]", dep)[0].strip().lower()


def test_dependencies_are_well_formed():
    pyproject = load_pyproject_toml()
    project = pyproject["project"]

    assert project["dependencies"], "Project should have dependencies defined"
    for dep in project["dependencies"]:
        assert is_valid_dependency(dep), f"Dependency '{dep}' is not PEP 508 formatted"
    for group, deps in project.get("optional-dependencies", {}).items():
        for dep in deps:
            assert is_valid_dependency(dep), f"Optional dependency '{dep}' in '{group}' is invalid"


def test_runtime_libraries_are_declared():
    """Every library imported at runtime is a declared dependency."""
    declared = {package_name(dep) for dep in load_pyproject_toml()["project"]["dependencies"]}

    for library in RUNTIME_LIBRARIES:
        assert library in declared, f"{library} is imported but not declared"


def test_test_tools_are_in_test_extra():
    test_deps = load_pyproject_toml()["project"]["optional-dependencies"]["test"]
    names = {package_name(dep) for dep in test_deps}

    assert {"pytest", "hypothesis", "tomli"} <= names


def test_dependencies_are_constrained():
    for dep in load_pyproject_toml()["project"]["dependencies"]:
        assert any(op in dep for op in [">=", "==", "~=", ">", "<", "!="]), (
            f"Dependency '{package_name(dep)}' should have a version constraint"
        )


def test_console_script_points_at_cli():
    scripts = load_pyproject_toml()["project"]["scripts"]

    assert scripts["cluster-caps"] == "cluster_capabilities.cli:app"


@given(
    name=st.from_regex(r"^[a-zA-Z0-9]([a-zA-Z0-9._-]*[a-zA-Z0-9])?$", fullmatch=True).filter(
        lambda x: x.isascii()
    ),
    version=st.from_regex(r"^[0-9]+\.[0-9]+\.[0-9]+$", fullmatch=True).filter(
        lambda x: x.isascii()
    ),
    operator=st.sampled_from([">=", "==", "~=", ">", "<", "!="]),
)
def test_valid_dependency_formats_accepted(name, version, operator):
    assert is_valid_dependency(f"{name}{operator}{version}")


@given(
    invalid_dep=st.sampled_from(
        ["", "   ", "-invalid", "invalid-", "invalid package", "package@1.0.0"]
    )
)
def test_invalid_dependency_formats_rejected(invalid_dep):
    assert not is_valid_dependency(invalid_dep)
