# src/confd/validator.py
"""
Validação sintática externa do arquivo gerado pelo flush.

O engine trata o validador como um colaborador opaco com o contrato:

    validator(path) -> ValidationResult(ok, diagnostic)

A implementação padrão (`CommandValidator`) executa um comando externo
em subprocesso, sempre com timeout. O comando padrão é
`python -m confd.lint <arquivo>`, que recarrega o arquivo com o mesmo
loader usado pelo engine.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence, Union


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ValidationResult:
    """Resultado de uma validação: aprovado/reprovado e diagnóstico textual."""

    ok: bool
    diagnostic: str = ""


Validator = Callable[[Path], ValidationResult]


def _package_root() -> str:
    return str(Path(__file__).resolve().parent.parent)


class CommandValidator:
    """
    Validador baseado em comando externo.

    O arquivo é aprovado se e somente se o comando terminar com código 0.
    O diagnóstico é a saída combinada (stdout + stderr) do comando.

    Args:
        command: Comando base; o caminho do arquivo é anexado ao final.
            Default: `[sys.executable, "-m", "confd.lint"]`.
        timeout: Timeout em segundos.
    """

    def __init__(self, command: Optional[Sequence[str]] = None, timeout: float = DEFAULT_TIMEOUT):
        self.command = list(command) if command else [sys.executable, "-m", "confd.lint"]
        self.timeout = timeout

    def _env(self) -> dict:
        # garante que `-m confd.lint` resolve este mesmo pacote
        env = dict(os.environ)
        paths = [_package_root()]
        if env.get("PYTHONPATH"):
            paths.append(env["PYTHONPATH"])
        env["PYTHONPATH"] = os.pathsep.join(paths)
        return env

    def __call__(self, path: Union[str, Path]) -> ValidationResult:
        args = self.command + [str(path)]
        logger.debug("Validando %s com %s", path, args)
        try:
            result = subprocess.run(
                args,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env=self._env(),
            )
        except subprocess.TimeoutExpired:
            return ValidationResult(False, f"Validação excedeu o timeout de {self.timeout}s")
        except OSError as e:
            return ValidationResult(False, f"Falha ao executar o validador {args[0]!r}: {e}")

        output = (result.stdout or "").strip()
        if result.stderr:
            output = f"{output}\n{result.stderr.strip()}".strip()
        if result.returncode != 0:
            output = f"{output}\n[exit code: {result.returncode}]".strip()

        return ValidationResult(result.returncode == 0, output)
