# src/atlas_railway/core/engine/__init__.py
"""
Engine do Atlas Railway.

Este pacote contém a execução de Sequences e os mecanismos acoplados a ela:

    - sequence → execução ordenada com short-circuit, derivação imutável
    - notifier → publicação síncrona do resultado de cada Step
    - matcher  → seleção do handler para o Result final

Princípios fundamentais:
    - A ordem de execução é exatamente a ordem declarada
    - O primeiro Failure encerra a chamada
    - Nenhuma decisão silenciosa: exceções não declaradas propagam

Limites explícitos:
    - Sem ramificação, paralelismo ou retry
    - Sem I/O
"""

from .matcher import Handler, Matcher, match
from .notifier import ALL, Notifier, StepListener
from .sequence import Sequence

__all__ = ["ALL", "Handler", "Matcher", "Notifier", "Sequence", "StepListener", "match"]
