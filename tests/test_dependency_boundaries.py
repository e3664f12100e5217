import ast
import unittest
from pathlib import Path
from typing import Iterable, List, Tuple


REPO_ROOT = Path(__file__).resolve().parents[1]

# Dependency rules:
# - the core package (testenv/) must not depend on the CLI layer (cli/)
# - audit and workspace code must not depend on the run path
FORBIDDEN_IMPORTS = {
    "testenv": ("cli", "testenv_cli", "testenv_runner"),
    "testenv/audit": ("testenv.execution", "testenv.toolkit"),
    "testenv/workspace": ("testenv.execution", "testenv.toolkit", "testenv.audit"),
}


def iter_py_files(package_dir: Path) -> Iterable[Path]:
    for p in package_dir.rglob("*.py"):
        if any(part.startswith(".") for part in p.parts):
            continue
        if "__pycache__" in p.parts:
            continue
        yield p


def _matches(module: str, forbidden: Tuple[str, ...]) -> bool:
    return any(module == f or module.startswith(f + ".") for f in forbidden)


def find_forbidden_imports(py_file: Path, forbidden: Tuple[str, ...]) -> List[str]:
    src = py_file.read_text(encoding="utf-8", errors="ignore")
    tree = ast.parse(src, filename=str(py_file))

    violations: List[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if _matches(alias.name, forbidden):
                    violations.append(alias.name)
        elif isinstance(node, ast.ImportFrom):
            # Relative imports stay inside their package by definition.
            if node.level != 0 or not node.module:
                continue
            if _matches(node.module, forbidden):
                violations.append(node.module)
    return violations


class TestDependencyBoundaries(unittest.TestCase):
    def test_dependency_direction_is_enforced(self) -> None:
        problems: List[str] = []

        for pkg, forbidden in FORBIDDEN_IMPORTS.items():
            pkg_dir = REPO_ROOT / pkg
            if not pkg_dir.exists():
                continue

            for py_file in iter_py_files(pkg_dir):
                bad = find_forbidden_imports(py_file, forbidden)
                if bad:
                    rel = py_file.relative_to(REPO_ROOT)
                    problems.append(f"{rel} imports forbidden modules: {bad}")

        if problems:
            self.fail("Forbidden imports detected (violates dependency direction):\n" + "\n".join(problems))


if __name__ == "__main__":
    unittest.main()
