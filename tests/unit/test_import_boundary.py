"""Unit tests for the import boundary checking script.

Tests verify that the hexagonal layering rules are enforced:
- domain/ and config/ import nothing from other src layers
- application/ imports from domain/ only
- infrastructure/ imports from domain/ and application/
- bootstrap/ may import every layer
"""

import ast

# Import from scripts directory
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "scripts"))

from check_imports import (
    ALLOWED_IMPORTS,
    check_import_boundaries,
    check_source,
    format_violations,
    get_imported_modules,
    layer_of_module,
    main,
)

SRC_DIR = Path(__file__).parent.parent.parent / "src"


def _write(root: Path, relative: str, source: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source)
    return path


class TestAllowedImports:
    def test_domain_imports_nothing(self) -> None:
        assert ALLOWED_IMPORTS["domain"] == frozenset()

    def test_application_imports_domain_only(self) -> None:
        assert ALLOWED_IMPORTS["application"] == {"domain"}

    def test_bootstrap_imports_everything(self) -> None:
        assert ALLOWED_IMPORTS["bootstrap"] == {
            "domain",
            "application",
            "infrastructure",
            "config",
        }


class TestGetImportedModules:
    def test_import_from_statement(self) -> None:
        node = ast.parse("from src.domain.models import Milestone").body[0]
        assert isinstance(node, ast.ImportFrom)
        assert get_imported_modules(node) == ["src.domain.models"]

    def test_import_lists_every_name(self) -> None:
        node = ast.parse("import os, src.infrastructure.stubs").body[0]
        assert isinstance(node, ast.Import)
        assert get_imported_modules(node) == ["os", "src.infrastructure.stubs"]

    def test_relative_import_ignored(self) -> None:
        node = ast.parse("from .models import Milestone").body[0]
        assert isinstance(node, ast.ImportFrom)
        assert get_imported_modules(node) == []


class TestLayerOfModule:
    @pytest.mark.parametrize(
        ("module", "layer"),
        [
            ("src.domain.models.milestone", "domain"),
            ("src.bootstrap", "bootstrap"),
            ("src", None),
            ("structlog", None),
            ("src.api.routes", None),
        ],
    )
    def test_layer(self, module: str, layer: str | None) -> None:
        assert layer_of_module(module) == layer


class TestCheckSource:
    def test_domain_importing_application(self) -> None:
        source = "from src.application.ports import SignatureOracleProtocol\n"
        [(_, line, message)] = check_source(source, "domain")
        assert line == 1
        assert message == "domain layer cannot import from application"

    def test_application_importing_infrastructure(self) -> None:
        source = "import json\nfrom src.infrastructure.stubs import SeededRandomSource\n"
        [(_, line, message)] = check_source(source, "application")
        assert line == 2
        assert "cannot import from infrastructure" in message

    def test_application_importing_config(self) -> None:
        source = "from src.config import VerificationConfig\n"
        assert len(check_source(source, "application")) == 1

    def test_imports_inside_functions_are_checked(self) -> None:
        source = "def f():\n    import src.bootstrap\n"
        assert len(check_source(source, "infrastructure")) == 1

    def test_allowed_imports(self) -> None:
        source = (
            "from src.domain.models import Milestone\n"
            "from src.application.ports import WebhookTransportProtocol\n"
            "from src.infrastructure.stubs import WebhookTransportStub\n"
        )
        assert check_source(source, "infrastructure") == []


class TestCheckImportBoundaries:
    def test_reports_violations_in_tree(self, tmp_path: Path) -> None:
        _write(tmp_path, "domain/models/ok.py", "from src.domain.errors import X\n")
        bad = _write(
            tmp_path, "application/services/bad.py", "from src.bootstrap import x\n"
        )

        violations = check_import_boundaries(tmp_path)

        assert violations == [
            (str(bad), 1, "application layer cannot import from bootstrap")
        ]

    def test_unparseable_file_skipped(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _write(tmp_path, "domain/broken.py", "def (:\n")

        assert check_import_boundaries(tmp_path) == []
        assert "Could not parse" in capsys.readouterr().err

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert check_import_boundaries(tmp_path / "absent") == []

    def test_project_source_is_clean(self) -> None:
        violations = check_import_boundaries(SRC_DIR)
        assert violations == [], format_violations(violations)


class TestMain:
    def test_exit_code_on_violation(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _write(tmp_path, "domain/leak.py", "import src.infrastructure\n")

        assert main([str(tmp_path)]) == 1
        assert "Total: 1 violation(s)" in capsys.readouterr().out

    def test_exit_code_clean(self, tmp_path: Path) -> None:
        _write(tmp_path, "domain/ok.py", "import hashlib\n")
        assert main([str(tmp_path)]) == 0
