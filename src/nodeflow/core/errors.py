"""
NodeFlow — Estruturas canônicas de erro (v1)

Este módulo define o payload canônico de erro devolvido em
`ExecutionResult.error`. Erros fazem parte do contrato operacional do
engine e devem ser:

- explícitos
- serializáveis
- distinguíveis por tipo (configuração vs. runtime)

O engine não formata mensagens para o usuário final; o chamador traduz
o payload para a interface que quiser.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do NodeFlow.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta (a mesma registrada em `errors`)
    - details: dados estruturados para diagnóstico (ex.: node_id)
    - hint: ação sugerida ao operador
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Estrutura do pipeline (rejeitado antes de qualquer nó executar)
PIPELINE_INVALID = "PIPELINE_INVALID"
PIPELINE_CYCLE = "PIPELINE_CYCLE"

# Runtime (aborta a run)
CONNECTOR_ERROR = "CONNECTOR_ERROR"
NODE_EXECUTION_ERROR = "NODE_EXECUTION_ERROR"
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def pipeline_invalid(
    *,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Corrija os nós/arestas da definição do pipeline antes de reexecutar.",
) -> ErrorPayload:
    return ErrorPayload(
        type=PIPELINE_INVALID,
        message=message,
        details=dict(details or {}),
        hint=hint,
    )


def pipeline_cycle(
    *,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Remova a aresta que fecha o ciclo; pipelines devem formar um DAG.",
) -> ErrorPayload:
    return ErrorPayload(
        type=PIPELINE_CYCLE,
        message=message,
        details=dict(details or {}),
        hint=hint,
    )


def connector_error(
    *,
    message: str,
    node_id: Optional[str] = None,
    node_type: Optional[str] = None,
    connector_type: Optional[str] = None,
    hint: str = "Verifique a configuração do conector; retries são responsabilidade do Connector Port.",
) -> ErrorPayload:
    return ErrorPayload(
        type=CONNECTOR_ERROR,
        message=message,
        details={
            "node_id": node_id,
            "node_type": node_type,
            "connector_type": connector_type,
        },
        hint=hint,
    )


def node_execution_error(
    *,
    message: str,
    node_id: Optional[str] = None,
    node_type: Optional[str] = None,
    exc_type: Optional[str] = None,
    hint: str = "Revise a configuração do nó indicado. Nenhum retry é aplicado pelo engine.",
) -> ErrorPayload:
    return ErrorPayload(
        type=NODE_EXECUTION_ERROR,
        message=message,
        details={
            "node_id": node_id,
            "node_type": node_type,
            "exc_type": exc_type,
        },
        hint=hint,
    )


def engine_execution_error(
    *,
    message: str,
    exc_type: Optional[str] = None,
    hint: str = "Falha inesperada fora do escopo de um nó; verifique o log de eventos da run.",
) -> ErrorPayload:
    return ErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message=message,
        details={"exc_type": exc_type},
        hint=hint,
    )
