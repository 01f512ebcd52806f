"""
Exceções da camada de configuração do NodeFlow.

Todas herdam de `ConfigError`, permitindo que o chamador diferencie
falhas de configuração do engine de falhas de execução de pipeline.

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende de Engine ou Pipeline
"""


class ConfigError(Exception):
    """Base para erros de carregamento ou resolução de configuração."""


class ConfigFileNotFoundError(ConfigError):
    """
    Arquivo de configuração (ou de definição de pipeline) inexistente.

    O arquivo de defaults é obrigatório; o override local é opcional e
    simplesmente ignorado quando ausente.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo não suportada.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do documento não é um mapa chave-valor."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos entre base e override durante o deep-merge.

    Exemplo:
        - base:     {"join": {"strategy": "hash"}}
        - override: {"join": "nested_loop"}
    """
