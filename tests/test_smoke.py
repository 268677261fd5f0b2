# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do confd.

Este módulo garante apenas que o pacote pode ser importado e que a
superfície pública esperada está exposta.

Limites explícitos:
    - Não testar lógica de merge, cache ou persistência
    - Não acumular asserts funcionais
"""

import confd


def test_smoke():
    """Smoke test mínimo: o pacote importa e expõe o engine."""
    assert confd.Config is not None
    assert "Config" in confd.__all__
