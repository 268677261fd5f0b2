# src/confd/merge.py
"""
Utilitário canônico de merge override ⊕ defaults.

Este módulo implementa a política oficial utilizada pelo confd para
materializar um part a partir do fragmento de override (store) e do
fragmento de defaults.

Política de merge (v1):
    - O merge é raso: opera apenas nas chaves de primeiro nível do part
    - Chave presente no override → valor do override (sempre vence)
    - Chave presente apenas nos defaults → adicionada ao resultado
    - Entrada que não é dict → erro estrutural explícito

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado durante o processo
    - A ordem do override é preservada; chaves de defaults entram ao final

Limites explícitos:
    - Não carrega arquivos de configuração
    - Não realiza merge recursivo de sub-dicionários
    - Não realiza coerção de tipos
"""

from copy import deepcopy
from typing import Any, Mapping, Dict

from .errors import ConfigTypeConflictError


def fill_missing(override: Mapping[str, Any], defaults: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Completa um fragmento de override com as chaves ausentes dos defaults.

    Esta função produz uma nova estrutura contendo todas as chaves do
    override (com seus valores) seguidas das chaves dos defaults que não
    existem no override.

    Invariantes:
        - Para toda chave `k` em ambos: resultado[k] == override[k]
        - Para toda chave `k` apenas nos defaults: resultado[k] == defaults[k]
        - O resultado é sempre um novo dicionário (cópia profunda)

    Args:
        override (Mapping[str, Any]): Fragmento de maior precedência.
        defaults (Mapping[str, Any]): Fragmento base.

    Returns:
        Dict[str, Any]: Nova estrutura resultante.

    Raises:
        ConfigTypeConflictError: Se algum dos lados não for um mapeamento.
    """
    if not isinstance(override, Mapping) or not isinstance(defaults, Mapping):
        raise ConfigTypeConflictError(
            f"Merge requer dicts, recebido: "
            f"{type(override).__name__} vs {type(defaults).__name__}"
        )

    result: Dict[str, Any] = deepcopy(dict(override))
    for key, default_value in defaults.items():
        if key not in result:
            result[key] = deepcopy(default_value)

    return result
