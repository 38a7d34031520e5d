# src/atlas_railway/core/pipeline/registry.py
"""
Registro de operações e contrato de resolução.

Este módulo define:
    - `Resolver`: contrato mínimo `resolve(identifier) -> Callable`
      consumido pelo builder ao construir uma Sequence
    - `OperationRegistry`: implementação simples do contrato, que registra
      operações por identificador e valida unicidade
    - `as_resolver`: adapta um `Mapping` identificador → operação ao contrato

O registry atua como uma camada de proteção antecipada, garantindo que:
    - cada operação possua um identificador válido
    - não existam identificadores duplicados
    - identificadores ausentes falhem na CONSTRUÇÃO, nunca na chamada

Decisões arquiteturais:
    - A resolução ocorre uma única vez por Step (build-time)
    - Erros de resolução são tratados como falhas fatais (`ResolutionError`)
    - O registry é dono do ciclo de vida das operações; Steps guardam
      apenas referências

Invariantes:
    - Cada identificador registrado é único
    - `identifiers()` reflete exatamente a ordem de registro

Limites explícitos:
    - Não constrói Sequences
    - Não executa operações
    - Não é um container de injeção de dependências completo

Este módulo existe para garantir integridade estrutural
e previsibilidade na resolução de operações.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Protocol, runtime_checkable

from atlas_railway.core.exceptions import DuplicateOperationError, ResolutionError


@runtime_checkable
class Resolver(Protocol):
    """Contrato externo de resolução de operações por identificador."""

    def resolve(self, identifier: str) -> Callable[..., Any]:
        ...


@dataclass
class OperationRegistry:
    """
    Registro canônico de operações nomeadas.

    Decisões arquiteturais:
        - A ordem de inserção é preservada separadamente
        - A estrutura interna não é exposta diretamente
        - Além de operações, aceita classes de exceção (usadas por `catch`
          em Sequences declaradas via config)

    Invariantes:
        - Cada identificador é único no registry
        - Apenas identificadores não vazios são aceitos
    """

    _entries: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, identifier: str, operation: Any) -> None:
        if not isinstance(identifier, str) or not identifier.strip():
            raise ValueError("identifier must be a non-empty string")

        if identifier in self._entries:
            raise DuplicateOperationError(
                f"Duplicate operation identifier: {identifier}",
                details={"identifier": identifier},
            )

        self._entries[identifier] = operation
        self._order.append(identifier)

    def register(self, identifier: str) -> Callable[[Any], Any]:
        """Decorator: `@registry.register("validate")`."""

        def decorator(operation: Any) -> Any:
            self.add(identifier, operation)
            return operation

        return decorator

    def resolve(self, identifier: str) -> Any:
        if identifier not in self._entries:
            raise ResolutionError(
                f"Operação não registrada: {identifier}",
                details={"identifier": identifier, "known": list(self._order)},
                hint="Registre a operação no OperationRegistry ou ajuste 'with'.",
            )
        return self._entries[identifier]

    def identifiers(self) -> List[str]:
        return list(self._order)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries


@dataclass(frozen=True)
class MappingResolver:
    """Adapta um `Mapping` identificador → operação ao contrato `Resolver`."""

    entries: Mapping[str, Any]

    def resolve(self, identifier: str) -> Any:
        try:
            return self.entries[identifier]
        except KeyError:
            raise ResolutionError(
                f"Operação não registrada: {identifier}",
                details={"identifier": identifier},
            ) from None


def as_resolver(source: Any) -> Resolver:
    if isinstance(source, Resolver):
        return source
    if isinstance(source, Mapping):
        return MappingResolver(source)
    raise TypeError(
        f"Resolver deve expor resolve(identifier) ou ser um Mapping, recebido: {type(source).__name__}"
    )
