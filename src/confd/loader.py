# src/confd/loader.py
"""
Loader canônico de arquivos de configuração do confd.

Este módulo implementa a primitiva "carregar dados estruturados de um
arquivo" utilizada pelo engine para o arquivo principal de overrides,
para os arquivos de defaults e para o backup.

Responsabilidades do módulo:
    - Carregar arquivos em YAML ou JSON
    - Validar o requisito estrutural mínimo (root dict)
    - Expor o contrato `Loader` para loaders alternativos

Princípios fundamentais:
    - O formato é determinado exclusivamente pela extensão
    - Arquivos vazios são interpretados como dicionários vazios
    - Erros estruturais são tratados como falhas fatais

Limites explícitos:
    - Não realiza merge de configuração
    - Não mantém cache de arquivos lidos
    - Não valida semântica de domínio
"""

from pathlib import Path
from typing import Any, Callable, Dict, Union
import json

import yaml  # PyYAML

from .errors import (
    ConfigFileNotFoundError,
    ConfigParseError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)


YAML_SUFFIXES = frozenset({".yaml", ".yml"})
JSON_SUFFIXES = frozenset({".json"})
SUPPORTED_SUFFIXES = YAML_SUFFIXES | JSON_SUFFIXES

# Contrato de loader plugável: caminho -> estrutura aninhada.
Loader = Callable[[Path], Dict[str, Any]]


def file_format(path: Union[str, Path]) -> str:
    """
    Retorna o formato canônico ("yaml" ou "json") associado à extensão.

    Raises:
        UnsupportedConfigFormatError: Se a extensão não for suportada.
    """
    suffix = Path(path).suffix.lower()
    if suffix in YAML_SUFFIXES:
        return "yaml"
    if suffix in JSON_SUFFIXES:
        return "json"
    raise UnsupportedConfigFormatError(f"Formato não suportado: {Path(path).suffix or path}")


def load_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Decisões arquiteturais:
        - O arquivo deve existir no momento do carregamento
        - O conteúdo raiz deve ser um dicionário (`dict`)
        - Arquivos vazios são interpretados como dicionários vazios
        - A ordem das chaves do arquivo é preservada

    Args:
        path (Union[str, Path]): Caminho para o arquivo de configuração.

    Returns:
        Dict[str, Any]: Conteúdo do arquivo carregado como dicionário.

    Raises:
        ConfigFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        ConfigParseError: Se o conteúdo não puder ser interpretado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigFileNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    fmt = file_format(path)

    try:
        with path.open("r", encoding="utf-8") as f:
            if fmt == "yaml":
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"YAML inválido em {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"JSON inválido em {path}: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__} ({path})"
        )

    return data
