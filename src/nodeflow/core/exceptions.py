"""
NodeFlow — Exceções canônicas (v1)

Este módulo define as exceções tipadas internas do NodeFlow.

Objetivo:
- Permitir que engine e operadores levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para ErrorPayload
- Separar erros de configuração do pipeline (estruturais) de falhas de runtime

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- A mensagem é curta e é exatamente o texto registrado em `ExecutionResult.errors`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class NodeflowException(Exception):
    """Base para exceções internas do NodeFlow.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embutir stack trace em payloads de erro
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Estrutura do pipeline (erros de configuração, detectados antes da execução)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InvalidPipelineError(NodeflowException):
    """Definição de pipeline estruturalmente inválida."""


@dataclass(frozen=True)
class CycleDetectedError(InvalidPipelineError):
    """As arestas do pipeline formam um ciclo; nenhuma ordem topológica existe."""


@dataclass(frozen=True)
class UnknownNodeError(InvalidPipelineError):
    """Uma aresta referencia um nó inexistente."""


@dataclass(frozen=True)
class DuplicateNodeIdError(InvalidPipelineError):
    """Dois nós compartilham o mesmo `id`."""


# ---------------------------------------------------------------------------
# Execução
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NodeExecutionError(NodeflowException):
    """Falha durante a execução de um nó (encapsula a exceção original)."""


@dataclass(frozen=True)
class ConnectorError(NodeflowException):
    """Falha reportada pelo Connector Port (fetch/write)."""


@dataclass(frozen=True)
class TypeCastError(NodeflowException):
    """Coerção inválida em `typecast` quando o modo estrito está habilitado."""


@dataclass(frozen=True)
class DuplicateOperatorError(NodeflowException):
    """Operador de transformação registrado duas vezes com o mesmo nome."""
