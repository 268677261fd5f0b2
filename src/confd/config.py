# src/confd/config.py
"""
Engine de configuração em camadas do confd.

Este módulo implementa o `Config`, que combina um único arquivo de
overrides editável pelo usuário (o *store*) com arquivos opcionais de
defaults, part a part.

Fluxo de leitura:
    - `get(nome)` consulta o cache de parts
    - em caso de miss, combina o fragmento do store com o fragmento de
      defaults (`confd.merge.fill_missing`), guarda o `Part` resultante
      no cache e o retorna

Fluxo de escrita:
    - toda mutação (`set`, `update_part`, `remove`) altera o store e
      invalida o part correspondente no cache
    - `flush()` serializa apenas o store, valida o arquivo gerado,
      faz backup do arquivo anterior e substitui o arquivo principal
    - `undo()` recarrega o store a partir do último backup (apenas em
      memória)

Invariantes:
    - Overrides sempre vencem defaults
    - Defaults nunca são persistidos
    - Existe no máximo um `Part` em cache por nome
    - Nenhuma edição feita pelas operações do engine é perdida no flush

Limites explícitos:
    - Não coordena escritores concorrentes (processos ou threads)
    - Não observa mudanças nos arquivos em disco
    - Não valida semântica dos valores
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Mapping
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence, Union

from .defaults import DefaultsResolver
from .errors import (
    ConfigPersistenceError,
    ConfigSyntaxError,
    ConfigTypeConflictError,
    PartTypeError,
)
from .export import dumps, normalize
from .loader import Loader, file_format, load_file
from .merge import fill_missing
from .part import Part
from .settings import ConfdSettings
from .validator import CommandValidator, Validator


logger = logging.getLogger(__name__)

_MISSING = object()


def _materialize(value: Any) -> Any:
    """Cópia desacoplada do chamador, com iteradores drenados e `to_dict()` aplicado."""
    return deepcopy(normalize(value))


def _index(node: Any, key: Any) -> Any:
    """Resolve um segmento de caminho em um dict ou lista; `_MISSING` se ausente."""
    if isinstance(node, Mapping):
        return node.get(key, _MISSING)
    if isinstance(node, (list, tuple)):
        if isinstance(key, str) and key.isdigit():
            key = int(key)
        if isinstance(key, int) and not isinstance(key, bool) and 0 <= key < len(node):
            return node[key]
    return _MISSING


class Config:
    """
    Engine de configuração: store de overrides + defaults + cache de parts.

    Args:
        conf_path: Arquivo principal de overrides (YAML ou JSON). Se não
            existir, o store começa vazio e o primeiro flush o cria.
        configs_dir: Diretório de defaults.
        loader: Loader alternativo (`caminho -> dict`). Default: `load_file`.
        validator: Validador alternativo (`caminho -> ValidationResult`).
            Default: `CommandValidator` com o timeout das settings.
        settings: Parâmetros de operação do engine.
        backup_dir: Diretório do backup. Default: diretório do arquivo principal.
    """

    def __init__(
        self,
        conf_path: Union[str, Path],
        configs_dir: Union[str, Path],
        *,
        loader: Optional[Loader] = None,
        validator: Optional[Validator] = None,
        settings: Optional[ConfdSettings] = None,
        backup_dir: Optional[Union[str, Path]] = None,
    ):
        self._settings = settings or ConfdSettings()
        self._conf_path = Path(conf_path)
        self._configs_dir = Path(configs_dir)
        self._load = loader or load_file
        self._defaults = DefaultsResolver(
            self._configs_dir, ext=self._settings.defaults_ext, loader=self._load
        )
        self._validate = validator or CommandValidator(timeout=self._settings.validator_timeout)
        self._backup_dir = Path(backup_dir) if backup_dir else None

        self._parts: Dict[str, Part] = {}
        self._generation = 0
        self._main: Dict[str, Any] = self._read(self._conf_path)

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def get_config_path(self) -> Path:
        return self._conf_path

    def get_configs_dir_path(self) -> Path:
        return self._configs_dir

    def set_backup_dir(self, backup_dir: Union[str, Path]) -> None:
        """Define o diretório onde o flush grava o backup e de onde o undo lê."""
        self._backup_dir = Path(backup_dir)

    def get_backup_dir(self) -> Path:
        return self._backup_dir or self._conf_path.parent

    @property
    def backup_path(self) -> Path:
        conf = self._conf_path
        return self.get_backup_dir() / f"{conf.name}{self._settings.backup_marker}{conf.suffix}"

    @property
    def tmp_path(self) -> Path:
        conf = self._conf_path
        return conf.with_name(f"{conf.name}{self._settings.tmp_marker}{conf.suffix}")

    def _read(self, path: Path) -> Dict[str, Any]:
        if not path.is_file():
            return {}
        return self._load(path)

    # ------------------------------------------------------------------
    # Leitura
    # ------------------------------------------------------------------

    def get(self, name: str) -> Any:
        """
        Retorna o part materializado `name` (override ⊕ defaults).

        Política de materialização (v1):
            - part em cache → retornado diretamente
            - override não-vazio + defaults → chaves do override vencem,
              chaves apenas dos defaults são adicionadas
            - override vazio/ausente + defaults → defaults
            - nenhum dos dois → `Part` vazio, **não** guardado no cache
            - override não-dict sem defaults → valor bruto, fora do cache

        Raises:
            ConfigTypeConflictError: Se o override não for dict e houver defaults.
        """
        cached = self._parts.get(name)
        if cached is not None:
            return cached

        override = self._main.get(name)
        defaults = self._defaults.load(name)

        if defaults is not None:
            merged = fill_missing(override, defaults) if override else defaults
        elif not override:
            return Part(name=name)
        elif not isinstance(override, Mapping):
            return deepcopy(override)
        else:
            merged = deepcopy(override)

        self._generation += 1
        part = Part(merged, name=name, generation=self._generation)
        self._parts[name] = part
        logger.debug("Part materializado: %s (geração %d)", name, self._generation)
        return part

    def find_path(self, keys: Iterable[Any]) -> Any:
        """
        Percorre a configuração chave a chave.

        O primeiro segmento é um nome de part; os seguintes indexam dicts
        (por chave) ou listas (por índice inteiro, aceitando strings de
        dígitos). Retorna `None` para uma sequência vazia ou assim que um
        segmento não puder ser resolvido; nunca levanta por ausência.
        Um part cujo override escalar conflita com os defaults também é
        tratado como não resolvido.
        """
        keys = list(keys)
        if not keys:
            return None

        first, rest = keys[0], keys[1:]
        if not self.has(first):
            return None

        try:
            node = self.get(first)
        except ConfigTypeConflictError:
            return None
        for key in rest:
            if node is None:
                return None
            node = _index(node, key)
            if node is _MISSING:
                return None
        return node

    def get_path(self, path: Union[str, Sequence[Any]], default: Any = None) -> Any:
        """
        Variante de `find_path` que aceita notação de ponto.

        Exemplo:
            config.get_path("part2.planets.earth.radius")
            config.get_path(["parts/part5", "deep"])
        """
        keys = path.split(".") if isinstance(path, str) else path
        value = self.find_path(keys)
        return default if value is None else value

    def get_defaults(self, name: str) -> Dict[str, Any]:
        """Retorna o fragmento bruto de defaults de `name` (ou `{}`), sem merge e sem cache."""
        defaults = self._defaults.load(name)
        return defaults if defaults is not None else {}

    def get_all_from(self, path: str, basename: bool = True) -> Dict[str, Any]:
        """
        Agrega entradas do store e do diretório de defaults sob `path/`.

        Regras de nomeação:
            - chave do store `path/folha` → `folha` (se `basename`), senão a chave completa
            - chaves mais profundas (`path/a/b`) → sempre a chave completa
            - arquivo `path/folha.ext` → `folha` (se `basename`), senão `path/folha`

        Em colisão de nomes, valores do store vencem e o arquivo apenas
        completa as chaves ausentes.
        """
        prefix = f"{path}/"
        result: Dict[str, Any] = {}

        for key, value in self._main.items():
            if not isinstance(key, str) or not key.startswith(prefix):
                continue
            leaf = key[len(prefix):]
            if basename and "/" not in leaf:
                result[leaf] = deepcopy(value)
            else:
                result[key] = deepcopy(value)

        for stem, data in self._defaults.iter_dir(path):
            name = stem if basename else f"{prefix}{stem}"
            if name in result:
                result[name] = fill_missing(result[name], data)
            else:
                result[name] = data

        return result

    def get_changes(self) -> Dict[str, Any]:
        """Retorna uma cópia do store (overrides pendentes do usuário)."""
        return deepcopy(self._main)

    def has(self, name: str) -> bool:
        return (
            name in self._parts
            or self._main.get(name) is not None
            or self._defaults.exists(name)
        )

    def is_cached(self, name: str) -> bool:
        return name in self._parts

    # ------------------------------------------------------------------
    # Escrita
    # ------------------------------------------------------------------

    def unset(self, name: str) -> None:
        """Remove apenas o part do cache; o fragmento do store é preservado."""
        if self._parts.pop(name, None) is not None:
            logger.debug("Part removido do cache: %s", name)

    def set(self, part: str, key: Any, value: Any) -> None:
        """
        Grava `value` em `store[part][key]` e invalida o part em cache.

        O store guarda uma cópia materializada de `value`: iteradores
        vivos são drenados e alterações posteriores do chamador não o afetam.

        Raises:
            PartTypeError: Se o fragmento existente no store não for dict.
        """
        fragment = self._main.get(part)
        if fragment is None:
            fragment = self._main[part] = {}
        elif not isinstance(fragment, dict):
            raise PartTypeError(
                f"Tipo inesperado {type(fragment).__name__} no part {part!r}, esperado dict"
            )
        fragment[key] = _materialize(value)
        self.unset(part)

    def update_part(self, part: str, values: Any) -> None:
        """
        Sobrescreve chaves de um part.

        Se o part já estiver materializado em cache, `values` precisa ser
        um dict: suas chaves são gravadas no fragmento do store e o cache
        é invalidado, de modo que a próxima leitura e o próximo flush
        reflitam a edição. Sem part em cache, `values` substitui
        integralmente `store[part]`.

        Raises:
            PartTypeError: Se o part estiver em cache e `values` não for dict.
        """
        if part not in self._parts:
            self._main[part] = _materialize(values)
            return

        if not isinstance(values, Mapping):
            raise PartTypeError(f"Tipo inesperado {type(values).__name__}, esperado dict")

        fragment = self._main.get(part)
        if not isinstance(fragment, dict):
            fragment = self._main[part] = {}
        fragment.update(_materialize(values))
        self.unset(part)

    def remove(self, part: str, key: Any = None) -> bool:
        """
        Remove uma chave de `store[part]`, ou o part inteiro se `key` for None.

        Returns:
            bool: False se o part (ou a chave) não existir no store.
        """
        if part not in self._main:
            return False

        fragment = self._main[part]
        if key is not None:
            if not isinstance(fragment, dict) or key not in fragment:
                return False
            del fragment[key]
        else:
            del self._main[part]

        self.unset(part)
        return True

    # Protocolo de mapeamento

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __setitem__(self, name: str, values: Any) -> None:
        self.update_part(name, values)

    def __delitem__(self, name: str) -> None:
        self.unset(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    # ------------------------------------------------------------------
    # Persistência
    # ------------------------------------------------------------------

    def flush(self) -> bool:
        """
        Persiste o store no arquivo principal, com validação e backup.

        Sequência:
            1. serializa o store e o conteúdo atual do arquivo principal;
               se os textos forem iguais, retorna False sem escrever nada
            2. grava o store serializado no arquivo temporário
            3. executa o validador sobre o arquivo temporário
            4. copia o arquivo principal atual para o backup
            5. substitui o arquivo principal pelo temporário (`os.replace`)

        Returns:
            bool: True se o arquivo principal foi substituído.

        Raises:
            ConfigSyntaxError: Se o validador rejeitar o arquivo temporário
                (o temporário é mantido para inspeção).
            ConfigPersistenceError: Se a escrita, o backup ou o rename falharem.
        """
        conf = self._conf_path
        fmt = file_format(conf)
        # comparação estrita: tipo (1 vs true vs 1.0) e ordem das chaves contam
        text = dumps(self._main, fmt)
        if text == dumps(self._read(conf), fmt):
            logger.debug("Nenhuma alteração a persistir em %s", conf)
            return False

        tmp = self.tmp_path
        try:
            with tmp.open("w", encoding=self._settings.encoding) as f:
                f.write(text)
        except OSError as e:
            raise ConfigPersistenceError(
                f"Falha ao gravar arquivo temporário {tmp}: {e}", path=str(tmp)
            ) from e

        result = self._validate(tmp)
        if not result.ok:
            logger.warning("Validação rejeitou %s: %s", tmp, result.diagnostic)
            raise ConfigSyntaxError(str(tmp), result.diagnostic)

        bak = self.backup_path
        if conf.exists():
            try:
                bak.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(conf, bak)
            except OSError as e:
                raise ConfigPersistenceError(
                    f"Falha ao copiar {conf} para o backup {bak}: {e}", path=str(conf), target=str(bak)
                ) from e
        else:
            logger.warning("Arquivo principal %s ainda não existe; backup não gerado", conf)

        try:
            os.replace(tmp, conf)
        except OSError as e:
            raise ConfigPersistenceError(
                f"Falha ao substituir {conf} por {tmp}: {e}", path=str(tmp), target=str(conf)
            ) from e

        logger.info("Configuração persistida em %s (backup: %s)", conf, bak)
        return True

    def undo(self) -> bool:
        """
        Recarrega o store a partir do último backup, apenas em memória.

        O arquivo principal não é alterado: um flush posterior tratará o
        conteúdo do backup como alterações pendentes.

        Returns:
            bool: False (sem efeito) se não houver arquivo de backup.
        """
        bak = self.backup_path
        if not bak.is_file():
            logger.info("Nenhum backup em %s; undo ignorado", bak)
            return False
        self.reload(bak)
        return True

    def reload(self, file: Optional[Union[str, Path]] = None) -> None:
        """
        Descarta cache e store e recarrega o store de `file`
        (default: arquivo principal). Se o arquivo não existir,
        o store permanece vazio.
        """
        path = Path(file) if file else self._conf_path
        data = self._read(path)
        self._parts.clear()
        self._main = data
        logger.info("Configuração recarregada de %s (%d parts)", path, len(data))
