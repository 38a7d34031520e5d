# src/atlas_railway/core/__init__.py
"""
Core do Atlas Railway.

Este pacote reúne a implementação canônica do motor de composição de
Steps (Railway-Oriented Programming).

O core é projetado para ser:
    - determinístico
    - síncrono (uma chamada roda inteira na thread que a invoca)
    - testável de forma isolada
    - livre de I/O durante a execução

Componentes principais:
    - result       → Success / Failure
    - pipeline     → adapters, Step, resolução e construção
    - engine       → Sequence, Notifier e Matcher
    - config       → configuração declarativa (YAML/JSON)
    - traceability → Manifest e Event Log de chamadas

Limites explícitos:
    - Não contém lógica de domínio
    - Não define tipos de erro de aplicação
    - Não é um motor de workflow (sem ramificação, paralelismo ou retry)
"""
