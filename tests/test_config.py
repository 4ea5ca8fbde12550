from __future__ import annotations

import importlib
import logging

import pytest

from budget_allocator import config


@pytest.fixture
def reload_config(monkeypatch):
    yield lambda: importlib.reload(config)
    monkeypatch.undo()
    importlib.reload(config)


def test_defaults() -> None:
    assert config.HISTORY_SEED == 42
    assert config.HISTORY_MONTHS == 24
    assert config.MATERIALITY_THRESHOLD == 3.0
    assert config.BALANCE_TOLERANCE == 0.1
    assert config.CATALOG_PATH.name == 'catalog.json'
    assert config.get_catalog_path().endswith('catalog.json')


def test_environment_overrides(monkeypatch, tmp_path, reload_config) -> None:
    monkeypatch.setenv('BUDGET_ALLOCATOR_HISTORY_SEED', '7')
    monkeypatch.setenv('BUDGET_ALLOCATOR_CATALOG_PATH', str(tmp_path / 'custom.json'))
    monkeypatch.setenv('BUDGET_ALLOCATOR_LOG_LEVEL', 'debug')
    reloaded = reload_config()

    assert reloaded.HISTORY_SEED == 7
    assert reloaded.CATALOG_PATH == (tmp_path / 'custom.json').resolve()
    assert reloaded.LOG_LEVEL == 'DEBUG'


def test_configure_logging_sets_level(monkeypatch) -> None:
    captured = {}
    monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: captured.update(kwargs))
    config.configure_logging('warning')
    assert captured['level'] == 'WARNING'
    assert '%(name)s' in captured['format']
