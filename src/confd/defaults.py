# src/confd/defaults.py
"""
Resolução de fragmentos de defaults a partir do diretório de defaults.

Layout esperado:
    - `<configs_dir>/<part><ext>`        → defaults de um part
    - `<configs_dir>/<path>/<nome>.<ext>` → entradas agregadas por `get_all_from`

Defaults são somente leitura: nunca são mutados nem persistidos, e são
relidos do disco a cada solicitação.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from .loader import SUPPORTED_SUFFIXES, Loader, load_file


logger = logging.getLogger(__name__)


class DefaultsResolver:
    """Localiza e carrega arquivos de defaults de um diretório."""

    def __init__(
        self,
        configs_dir: Union[str, Path],
        *,
        ext: str = ".yaml",
        loader: Optional[Loader] = None,
    ):
        self.configs_dir = Path(configs_dir)
        self.ext = ext
        self._load = loader or load_file

    def part_path(self, name: str) -> Path:
        return self.configs_dir / f"{name}{self.ext}"

    def exists(self, name: str) -> bool:
        return self.part_path(name).is_file()

    def load(self, name: str) -> Optional[Dict[str, Any]]:
        """Retorna o fragmento de defaults de `name`, ou None se não houver arquivo."""
        path = self.part_path(name)
        if not path.is_file():
            return None
        logger.debug("Carregando defaults de %r: %s", name, path)
        return self._load(path)

    def iter_dir(self, path: str) -> Iterator[Tuple[str, Dict[str, Any]]]:
        """
        Itera `(stem, fragmento)` para cada arquivo suportado em `<configs_dir>/<path>/`.

        Subdiretórios e arquivos com extensão não suportada são ignorados.
        A ordem é a ordem alfabética dos nomes de arquivo.
        """
        directory = self.configs_dir / path
        if not directory.is_dir():
            return
        for file in sorted(directory.iterdir(), key=lambda p: p.name):
            if not file.is_file() or file.suffix.lower() not in SUPPORTED_SUFFIXES:
                continue
            yield file.stem, self._load(file.resolve())
