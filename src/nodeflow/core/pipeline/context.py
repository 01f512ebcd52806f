# src/nodeflow/core/pipeline/context.py
"""
Contexto de execução de uma run do pipeline.

Este módulo define o `ExecutionContext`, o estado transitório de uma
única execução. Ele é criado no início da run, mutado nó a nó pelo
dispatcher e consumido exatamente uma vez para produzir o
`ExecutionResult`.

O ExecutionContext consolida:
    - identidade da execução (run_id, pipeline_id, config_hash)
    - configuração efetiva do engine
    - datasets materializados por nó (write-once, read-many)
    - erros fatais (append-only)
    - estatísticas agregadas (ExecutionStats)
    - log estruturado de eventos e warnings por nó

Invariantes:
    - Cada run possui seu próprio contexto; nada é compartilhado entre runs
    - O dataset de um nó é gravado no máximo uma vez
    - `build_result` só pode ser chamado uma vez

Limites explícitos:
    - Não executa nós
    - Não decide ordem de execução
    - Não persiste dados
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .types import ExecutionResult, ExecutionStats, Row


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ExecutionContext:
    """Estado exclusivo de uma execução em andamento."""

    run_id: str
    pipeline_id: str
    config: Dict[str, Any] = field(default_factory=dict)
    dry_run: bool = False
    config_hash: Optional[str] = None

    stats: ExecutionStats = field(default_factory=lambda: ExecutionStats(start_time=_utcnow()))
    errors: List[str] = field(default_factory=list)
    events: List[Dict[str, Any]] = field(default_factory=list)
    warnings: Dict[str, List[str]] = field(default_factory=dict)
    node_order: List[str] = field(default_factory=list)

    _data: Dict[str, List[Row]] = field(default_factory=dict, init=False, repr=False)
    _consumed: bool = field(default=False, init=False, repr=False)

    # -----------------------------
    # Datasets materializados
    # -----------------------------
    def set_output(self, node_id: str, rows: List[Row]) -> None:
        if node_id in self._data:
            raise RuntimeError(f"Output for node '{node_id}' was already materialized")
        self._data[node_id] = rows

    def has_output(self, node_id: str) -> bool:
        return node_id in self._data

    def get_output(self, node_id: str) -> List[Row]:
        if node_id not in self._data:
            raise KeyError(node_id)
        return self._data[node_id]

    def outputs(self) -> Dict[str, List[Row]]:
        """Visão somente-leitura (cópia rasa) dos datasets por nó."""
        return dict(self._data)

    # -----------------------------
    # Estatísticas
    # -----------------------------
    def record_processed(self, count: int) -> None:
        self.stats.rows_processed += count

    def record_filtered(self, count: int) -> None:
        self.stats.rows_filtered += count

    def record_output(self, count: int) -> None:
        self.stats.rows_output += count

    # -----------------------------
    # Logging, warnings & erros
    # -----------------------------
    def log(self, *, node_id: Optional[str], level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "node_id": node_id,
            "level": level,
            "message": message,
            "timestamp": _utcnow().isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, node_id: str, message: str) -> None:
        if node_id not in self.warnings:
            self.warnings[node_id] = []
        self.warnings[node_id].append(message)
        self.log(node_id=node_id, level="warning", message=message)

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    # -----------------------------
    # Resultado
    # -----------------------------
    def build_result(
        self,
        *,
        output_data: Optional[List[Row]],
        error: Optional[Dict[str, Any]] = None,
    ) -> ExecutionResult:
        """Carimba `end_time` e consome o contexto, produzindo o ExecutionResult."""
        if self._consumed:
            raise RuntimeError(f"ExecutionContext for run '{self.run_id}' was already consumed")
        self._consumed = True

        self.stats.end_time = _utcnow()
        return ExecutionResult(
            success=not self.errors,
            stats=self.stats,
            errors=list(self.errors),
            output_data=output_data,
            run_id=self.run_id,
            pipeline_id=self.pipeline_id,
            config_hash=self.config_hash,
            node_order=list(self.node_order),
            error=error,
            warnings={k: list(v) for k, v in self.warnings.items()},
            events=list(self.events),
        )
