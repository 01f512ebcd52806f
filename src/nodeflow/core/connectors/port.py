# src/nodeflow/core/connectors/port.py
"""
Contrato do Connector Port.

O Connector Port é a única capacidade externa injetada no engine. Ele
lê linhas para nós `source` e grava linhas para nós `destination`; o
engine não conhece drivers, protocolos ou credenciais.

Contrato mínimo:
    - fetch_data(connector_type, config) -> rows
        usado por `source` fora de dry-run; falhas propagam e abortam a run
    - get_sample_data(connector_type, config) -> rows
        usado por `source` em dry-run; não pode realizar I/O real
    - write_data(connector_type, config, rows) -> None
        usado por `destination` fora de dry-run; nunca chamado em dry-run

Decisões:
    - Conformidade por duck typing (`@runtime_checkable`), sem herança
    - Retry, timeout e cancelamento pertencem ao conector ou ao chamador
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol, runtime_checkable

Row = Dict[str, Any]


@runtime_checkable
class ConnectorPort(Protocol):
    """Capacidade de leitura/escrita de linhas usada por nós source/destination."""

    def fetch_data(self, connector_type: Optional[str], config: Mapping[str, Any]) -> List[Row]:
        ...

    def get_sample_data(self, connector_type: Optional[str], config: Mapping[str, Any]) -> List[Row]:
        ...

    def write_data(self, connector_type: Optional[str], config: Mapping[str, Any], rows: List[Row]) -> None:
        ...
