# src/confd/export.py
"""
Exportação literal do store de overrides.

Este módulo converte o store em texto literal (YAML ou JSON) que, ao
ser carregado novamente por `confd.loader.load_file`, reproduz uma
estrutura igual à exportada.

Política de exportação (v1):
    - dict / Mapping (inclusive `Part`) → mapa chave-valor, ordem de inserção preservada
    - list / tuple → sequência posicional
    - iteradores vivos (generators, iter(...)) → drenados para lista
    - objetos com `to_dict()` → convertidos pelo próprio hook
    - escalares → forma literal canônica do formato de destino
    - cada nível de aninhamento é indentado em um nível

Limites explícitos:
    - Não escreve arquivos (responsabilidade do engine)
    - Não valida o texto gerado (responsabilidade do validador)
"""

from collections.abc import Iterator, Mapping
from typing import Any
import json

import yaml  # PyYAML

from .errors import ConfigSerializationError, UnsupportedConfigFormatError


INDENT = 2


def normalize(value: Any) -> Any:
    """
    Converte recursivamente `value` em dados puros exportáveis.

    Raises:
        ConfigSerializationError: Se o hook `to_dict()` falhar.
    """
    if isinstance(value, Mapping):
        return {k: normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize(v) for v in value]
    if isinstance(value, Iterator):
        return [normalize(v) for v in value]

    to_dict = getattr(type(value), "to_dict", None)
    if callable(to_dict):
        try:
            converted = value.to_dict()
        except Exception as e:  # noqa: BLE001
            raise ConfigSerializationError(
                f"Falha ao serializar {type(value).__name__} via to_dict(): {e}"
            ) from e
        return normalize(converted)

    return value


def dumps(data: Any, fmt: str = "yaml") -> str:
    """
    Renderiza `data` (após `normalize`) como texto literal.

    Args:
        data: Estrutura a exportar (tipicamente o store inteiro).
        fmt: "yaml" ou "json".

    Returns:
        str: Texto pronto para ser gravado em disco.

    Raises:
        UnsupportedConfigFormatError: Se `fmt` for desconhecido.
        ConfigSerializationError: Se algum valor não for representável.
    """
    plain = normalize(data)

    if fmt == "yaml":
        try:
            return yaml.safe_dump(
                plain,
                sort_keys=False,
                allow_unicode=True,
                default_flow_style=False,
                indent=INDENT,
            )
        except yaml.YAMLError as e:
            raise ConfigSerializationError(f"Valor não exportável para YAML: {e}") from e

    if fmt == "json":
        try:
            return json.dumps(plain, indent=INDENT, ensure_ascii=False) + "\n"
        except (TypeError, ValueError) as e:
            raise ConfigSerializationError(f"Valor não exportável para JSON: {e}") from e

    raise UnsupportedConfigFormatError(f"Formato de exportação não suportado: {fmt}")
