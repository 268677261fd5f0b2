# src/confd/errors.py
"""
Exceções canônicas do confd.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento de arquivos, a materialização de parts, a serialização
e a persistência do store de overrides.

As exceções aqui definidas representam **falhas fatais explícitas**.
Ausências comuns (part inexistente, default inexistente, caminho não
resolvido) não são erros: o engine devolve resultados vazios.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros de persistência sempre carregam o caminho do arquivo envolvido
    - Mensagens de erro são direcionadas ao operador

Invariantes:
    - Todas as exceções do confd herdam de `ConfigError`

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não registra logs
"""

from typing import Optional


class ConfigError(Exception):
    """
    Exceção base para todos os erros do confd.

    Permite captura genérica de falhas de configuração, distinguindo-as
    de erros de programação comuns.
    """


class ConfigFileNotFoundError(ConfigError):
    """
    Exceção levantada pelo loader quando o arquivo solicitado não existe.

    O engine trata essa condição como ausência (resultado vazio) nos
    pontos em que o contrato assim define; o loader, isoladamente,
    sempre falha de forma explícita.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo não é suportado.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz de um arquivo
    não é um dicionário (`dict`).

    Listas ou escalares no root são inválidos: todo arquivo de
    configuração representa um mapa chave-valor.
    """


class ConfigParseError(ConfigError):
    """Exceção levantada quando o conteúdo YAML/JSON é sintaticamente inválido."""


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando o merge override ⊕ defaults recebe
    estruturas que não são dicionários.

    Exemplo de conflito:
        - override: {"cache": "off"}
        - default:  cache.yaml → {"ttl": 60}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class PartTypeError(ConfigError):
    """
    Exceção levantada quando o chamador viola o contrato de tipo de um part.

    Casos cobertos:
        - `update_part` sobre um part já materializado com valor não-dict
        - `set` sobre um fragmento do store que não é dict
    """


class ConfigSerializationError(ConfigError):
    """Exceção levantada quando o store contém valores não exportáveis."""


class ConfigSyntaxError(ConfigError):
    """
    Exceção levantada quando o validador externo rejeita o arquivo
    temporário gerado pelo flush.

    O arquivo temporário **não** é removido, permitindo inspeção manual.

    Attributes:
        path: Caminho do arquivo temporário rejeitado.
        diagnostic: Saída do validador.
    """

    def __init__(self, path: str, diagnostic: str):
        self.path = path
        self.diagnostic = diagnostic
        super().__init__(f"Erro no arquivo temporário {path}: {diagnostic}")


class ConfigPersistenceError(ConfigError):
    """
    Exceção levantada quando a cópia de backup ou o rename final falham.

    O arquivo principal permanece no estado anterior ao flush; o estado
    do backup, após uma cópia com falha, deve ser considerado não confiável.

    Attributes:
        path: Arquivo de origem da operação.
        target: Arquivo de destino da operação.
    """

    def __init__(self, message: str, *, path: str, target: Optional[str] = None):
        self.path = path
        self.target = target
        super().__init__(message)
