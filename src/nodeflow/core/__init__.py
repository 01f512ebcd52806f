# src/nodeflow/core/__init__.py
"""
Core do NodeFlow.

Reúne as responsabilidades essenciais de planejamento e execução de
pipelines:
    - config     → resolução de configuração (defaults, merge, hashing)
    - pipeline   → tipos do DAG, contexto de execução, validação e registry
    - connectors → contrato do Connector Port e implementação em memória
    - engine     → planner, dispatcher e executor
    - errors / exceptions → catálogo de erros e exceções tipadas

Limites explícitos:
    - Não contém drivers de bancos, APIs ou arquivos
    - Não contém lógica de UI, agendamento ou persistência
"""
