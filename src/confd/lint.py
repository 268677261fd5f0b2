# src/confd/lint.py
"""Verificação de sintaxe de arquivos de configuração (`python -m confd.lint <arquivo>...`)."""

import sys
from typing import List, Optional

from .errors import ConfigError
from .loader import load_file


def main(argv: Optional[List[str]] = None) -> int:
    files = sys.argv[1:] if argv is None else argv
    if not files:
        print("Uso: python -m confd.lint <arquivo> [<arquivo> ...]", file=sys.stderr)
        return 2

    status = 0
    for file in files:
        try:
            load_file(file)
        except ConfigError as e:
            print(f"Errors parsing {file}: {e}")
            status = 1
        else:
            print(f"No syntax errors detected in {file}")
    return status


if __name__ == "__main__":
    sys.exit(main())
