"""
Import validation tests.

These tests ensure all modules can be imported successfully, catching
issues like missing dependencies or circular imports BEFORE deployment.

Run with: pytest tests/unit/test_imports.py -v
"""

import importlib
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).parent.parent.parent / "src"


class TestHandlerImports:
    """Verify all handler modules can be imported without errors."""

    @pytest.mark.parametrize("module_name", [
        "handlers.main",
        "handlers.health_check",
        "handlers.analytics",
        "handlers.priority",
        "handlers.email_templates",
    ])
    def test_handler_import(self, module_name: str):
        module = importlib.import_module(module_name)
        assert hasattr(module, "lambda_handler"), f"{module_name} missing lambda_handler"

    @pytest.mark.parametrize("module_name,attrs", [
        ("handlers.customers", ("list_handler", "get_handler", "update_handler")),
        ("handlers.activity", ("mark_contacted_handler", "create_task_handler", "list_tasks_handler")),
    ])
    def test_multi_route_handler_import(self, module_name: str, attrs):
        module = importlib.import_module(module_name)
        for attr in attrs:
            assert hasattr(module, attr), f"{module_name} missing {attr}"


@pytest.mark.parametrize("module_name", [
    "services.scoring",
    "services.enrichment",
    "services.ranking",
    "services.customer_service",
    "services.activity_service",
    "services.analytics_service",
    "services.email_templates",
    "repositories.base",
    "repositories.memory_repo",
    "repositories.seed",
    "repositories.postgres_repo",
    "repositories.dynamodb_repo",
    "repositories.provider",
    "models.customer",
    "models.activity",
    "models.priority",
    "models.analytics",
    "models.email",
    "utils.logging_config",
    "utils.error_handling",
    "utils.validators",
    "utils.settings",
])
def test_module_import(module_name: str):
    try:
        importlib.import_module(module_name)
    except ImportError as e:
        pytest.fail(f"Failed to import {module_name}: {e}")


@pytest.mark.parametrize("package", ["handlers", "services", "models", "utils", "repositories"])
def test_no_src_prefix(package: str):
    """Lambda ships src/ as the root; 'from src.' imports would break there."""
    for py_file in (SRC_PATH / package).glob("*.py"):
        content = py_file.read_text()
        assert "from src." not in content, f"{py_file.name} contains 'from src.' import"
        assert "import src." not in content, f"{py_file.name} contains 'import src.' import"
