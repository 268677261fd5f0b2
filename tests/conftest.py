# tests/conftest.py
"""
Fixtures compartilhados para testes do confd.

Este módulo define fixtures reutilizáveis que fornecem:
- o diretório de fixtures (arquivo principal + diretório de defaults)
- um engine apontando para os fixtures originais (somente leitura)
- um engine de trabalho sobre uma cópia em `tmp_path` (para flush/undo)
- validadores determinísticos que não dependem de subprocesso

Decisões arquiteturais:
    - Testes que escrevem em disco operam sempre sobre cópias em `tmp_path`
    - O arquivo `tests/fixtures/main.yaml` nunca é alterado
    - Validadores stub registram os caminhos recebidos

Invariantes:
    - Nenhuma fixture depende de variáveis de ambiente
    - Todas as fixtures são seguras para execução em paralelo
"""

import shutil
from pathlib import Path

import pytest

from confd import Config, ValidationResult


FIXTURES_DIR = Path(__file__).parent / "fixtures"


class RecordingValidator:
    """Validador stub: aprova (ou reprova) e registra os caminhos recebidos."""

    def __init__(self, ok: bool = True, diagnostic: str = ""):
        self.ok = ok
        self.diagnostic = diagnostic
        self.calls = []

    def __call__(self, path):
        self.calls.append(Path(path))
        return ValidationResult(self.ok, self.diagnostic)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def configs_dir(fixtures_dir) -> Path:
    return fixtures_dir / "config.d"


@pytest.fixture
def passing_validator() -> RecordingValidator:
    return RecordingValidator(ok=True)


@pytest.fixture
def failing_validator() -> RecordingValidator:
    return RecordingValidator(ok=False, diagnostic="Parse error: unexpected end of file")


@pytest.fixture
def config(fixtures_dir, configs_dir, passing_validator) -> Config:
    """
    Engine sobre os fixtures originais.

    Adequado apenas para leitura e mutações em memória: nenhum teste que
    use esta fixture pode chamar `flush()`.
    """
    return Config(fixtures_dir / "main.yaml", configs_dir, validator=passing_validator)


@pytest.fixture
def work_conf(tmp_path, fixtures_dir) -> Path:
    """Cópia de `main.yaml` em `tmp_path`, segura para flush/undo."""
    target = tmp_path / "main.yaml"
    shutil.copyfile(fixtures_dir / "main.yaml", target)
    return target


@pytest.fixture
def work_config(work_conf, configs_dir, passing_validator) -> Config:
    return Config(work_conf, configs_dir, validator=passing_validator)


@pytest.fixture
def flat_config_yaml() -> str:
    """Arquivo principal mínimo com escalares e lista, usado nos testes de flush."""
    return """\
int: 123
float: 123.45
text: string
arr:
  - 1
  - '2.3'
  - four
  - true
"""
