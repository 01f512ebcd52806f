"""
Connector Port do NodeFlow.

    - port   → protocolo `ConnectorPort` (fetch / sample / write)
    - memory → `InMemoryConnector`, implementação de referência em memória

Conectores reais (bancos, APIs, arquivos) vivem fora do core e apenas
satisfazem o protocolo.
"""

from .memory import DEFAULT_SAMPLE_ROWS, InMemoryConnector
from .port import ConnectorPort

__all__ = ["ConnectorPort", "DEFAULT_SAMPLE_ROWS", "InMemoryConnector"]
