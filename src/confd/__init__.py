# src/confd/__init__.py
"""
confd — engine de configuração em camadas.

Um único arquivo de overrides editável pelo usuário é combinado, part a
part, com arquivos opcionais de defaults de um diretório. Parts são
materializados sob demanda e mantidos em cache; apenas os overrides são
persistidos, com validação sintática, backup e undo.

Arquitetura em alto nível:
    - config    → engine (`Config`): store, cache de parts e persistência
    - defaults  → resolução de arquivos de defaults
    - loader    → carregamento de YAML/JSON
    - merge     → política override ⊕ defaults
    - export    → serialização literal do store
    - validator → validação sintática externa antes do flush
    - errors    → hierarquia de exceções

Limites explícitos:
    - Não é um template engine nem um framework de schema
    - Não sincroniza configuração entre processos ou máquinas
"""

from .config import Config
from .errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigPersistenceError,
    ConfigSerializationError,
    ConfigSyntaxError,
    ConfigTypeConflictError,
    InvalidConfigRootTypeError,
    PartTypeError,
    UnsupportedConfigFormatError,
)
from .loader import load_file
from .part import Part
from .settings import ConfdSettings
from .validator import CommandValidator, ValidationResult

__all__ = [
    "Config",
    "ConfdSettings",
    "CommandValidator",
    "ValidationResult",
    "Part",
    "load_file",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigParseError",
    "ConfigPersistenceError",
    "ConfigSerializationError",
    "ConfigSyntaxError",
    "ConfigTypeConflictError",
    "InvalidConfigRootTypeError",
    "PartTypeError",
    "UnsupportedConfigFormatError",
]

__version__ = "0.1.0"
