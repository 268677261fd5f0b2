# src/confd/settings.py
"""Parâmetros de operação do engine (extensões, sufixos e timeout do validador)."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from .errors import ConfigError


@dataclass(frozen=True)
class ConfdSettings:
    """
    Configuração do próprio engine.

    Attributes:
        defaults_ext: Extensão dos arquivos de defaults de cada part.
        tmp_marker: Marcador do arquivo temporário (`main.yaml.tmp.yaml`).
        backup_marker: Marcador do arquivo de backup (`main.yaml.bak.yaml`).
        validator_timeout: Timeout, em segundos, do validador externo.
        encoding: Encoding usado na escrita do arquivo temporário.
    """

    defaults_ext: str = ".yaml"
    tmp_marker: str = ".tmp"
    backup_marker: str = ".bak"
    validator_timeout: float = 30.0
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if not self.defaults_ext.startswith("."):
            raise ConfigError(f"defaults_ext deve começar com '.', recebido: {self.defaults_ext!r}")
        if self.validator_timeout <= 0:
            raise ConfigError("validator_timeout deve ser positivo")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ConfdSettings":
        """Constrói as settings a partir de um dict, rejeitando chaves desconhecidas."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Chaves de settings desconhecidas: {unknown}")
        return cls(**dict(data))

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
