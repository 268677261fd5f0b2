# src/confd/part.py
"""Visão materializada (override ⊕ defaults) de um part nomeado."""

from __future__ import annotations

from typing import Any, Mapping, Optional


class Part(dict):
    """
    Part materializado, com acesso por chave e por atributo.

    `part["site"]` e `part.site` são equivalentes. O Part é dono de uma
    cópia dos dados: alterá-lo não altera o store de overrides, e
    alterações feitas diretamente nele não são persistidas pelo flush.

    Attributes:
        name: Nome do part (pode conter `/`).
        generation: Número de materialização atribuído pelo engine;
            0 indica um part vazio que não foi para o cache.
    """

    __slots__ = ("name", "generation")

    def __init__(self, data: Optional[Mapping[str, Any]] = None, *, name: str = "", generation: int = 0):
        super().__init__(data or {})
        self.name = name
        self.generation = generation

    def __getattr__(self, key: str) -> Any:
        try:
            return self[key]
        except KeyError:
            raise AttributeError(f"Part não possui a chave {key!r}") from None

    def __repr__(self) -> str:
        return f"Part({self.name!r}, {dict.__repr__(self)}, generation={self.generation})"

    def to_dict(self) -> dict:
        return dict(self)
