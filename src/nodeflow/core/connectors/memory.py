# src/nodeflow/core/connectors/memory.py
"""
Connector Port em memória.

Implementação de referência do contrato `ConnectorPort`, útil para
testes, notebooks e execuções embarcadas sem drivers reais.

Comportamento:
    - datasets são registrados por `connector_type` e, opcionalmente, por
      nome (`config["dataset"]` seleciona qual nome ler)
    - `write_data` acumula as gravações em `written`
    - `get_sample_data` devolve as amostras registradas para o tipo ou,
      na ausência delas, as três linhas de amostra padrão do produto
    - tipos de conector não registrados levantam ConnectorError
    - toda chamada é registrada em `calls` (método, connector_type)

Cópias rasas das linhas são entregues e armazenadas; o conector nunca
compartilha listas com o engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from nodeflow.core.exceptions import ConnectorError

from .port import Row

DEFAULT_SAMPLE_ROWS: Tuple[Row, ...] = (
    {"id": 1, "name": "Sample 1", "value": 100},
    {"id": 2, "name": "Sample 2", "value": 200},
    {"id": 3, "name": "Sample 3", "value": 300},
)

_DEFAULT = "__default__"


@dataclass
class InMemoryConnector:
    """ConnectorPort baseado em dicionários em memória."""

    datasets: Dict[str, Dict[str, List[Row]]] = field(default_factory=dict)
    samples: Dict[str, List[Row]] = field(default_factory=dict)
    sinks: Set[str] = field(default_factory=set)

    written: List[Dict[str, Any]] = field(default_factory=list, init=False)
    calls: List[Tuple[str, Optional[str]]] = field(default_factory=list, init=False)

    # -----------------------------
    # Registro
    # -----------------------------
    def register(self, connector_type: str, rows: List[Row], *, name: Optional[str] = None) -> None:
        self.datasets.setdefault(connector_type, {})[name or _DEFAULT] = [dict(r) for r in rows]

    def register_sample(self, connector_type: str, rows: List[Row]) -> None:
        self.samples[connector_type] = [dict(r) for r in rows]

    def register_sink(self, connector_type: str) -> None:
        self.sinks.add(connector_type)

    # -----------------------------
    # ConnectorPort
    # -----------------------------
    def fetch_data(self, connector_type: Optional[str], config: Mapping[str, Any]) -> List[Row]:
        self.calls.append(("fetch_data", connector_type))
        if connector_type not in self.datasets:
            raise ConnectorError(
                message=f"Unsupported connector type: {connector_type}",
                details={"connector_type": connector_type},
            )
        name = config.get("dataset") or _DEFAULT
        by_name = self.datasets[connector_type]
        if name not in by_name:
            raise ConnectorError(
                message=f"Dataset '{name}' not found for connector {connector_type}",
                details={"connector_type": connector_type, "dataset": name},
            )
        return [dict(r) for r in by_name[name]]

    def get_sample_data(self, connector_type: Optional[str], config: Mapping[str, Any]) -> List[Row]:
        self.calls.append(("get_sample_data", connector_type))
        rows = self.samples.get(connector_type) if connector_type else None
        return [dict(r) for r in (rows if rows is not None else DEFAULT_SAMPLE_ROWS)]

    def write_data(self, connector_type: Optional[str], config: Mapping[str, Any], rows: List[Row]) -> None:
        self.calls.append(("write_data", connector_type))
        if connector_type not in self.sinks and connector_type not in self.datasets:
            raise ConnectorError(
                message=f"Unsupported connector type: {connector_type}",
                details={"connector_type": connector_type},
            )
        self.written.append(
            {
                "connector_type": connector_type,
                "config": dict(config),
                "rows": [dict(r) for r in rows],
            }
        )

    def rows_written(self, connector_type: str) -> List[Row]:
        """Todas as linhas gravadas em `connector_type`, na ordem de escrita."""
        out: List[Row] = []
        for w in self.written:
            if w["connector_type"] == connector_type:
                out.extend(w["rows"])
        return out
