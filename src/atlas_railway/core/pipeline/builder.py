# src/atlas_railway/core/pipeline/builder.py
"""
Superfície de construção de Sequences.

Uma Sequence é declarada como uma lista ordenada de especificações
`(kind, name, with?, catch?)` e construída contra um resolver:

    seq = (
        SequenceBuilder()
        .map("process")
        .try_("validate", catch=ValidationFailure)
        .tee("persist")
        .build(registry)
    )

Três formas equivalentes são oferecidas:
    - `SequenceBuilder` (fluente, em código)
    - `build_sequence(specs, resolver)` (lista de dicts)
    - `build_sequence_from_config(config, resolver)` (config YAML/JSON carregada)

Decisões arquiteturais:
    - Cada operação é resolvida UMA vez, aqui; falhas de resolução abortam
      a construção com `ResolutionError`
    - `with` substitui o identificador usado no resolver (default: o nome)
    - Em config, `catch` lista identificadores resolvidos pelo MESMO resolver,
      e cada um deve ser uma classe de exceção
    - Em config, `steps.<nome>.enabled: false` remove o Step na construção

Invariantes:
    - Nenhuma Sequence parcial é produzida em caso de erro
    - A ordem declarada é a ordem de execução

Limites explícitos:
    - Não executa a Sequence
    - Não é uma DSL: apenas a superfície mínima de declaração
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional

from atlas_railway.core.config.errors import InvalidSequenceConfigError
from atlas_railway.core.exceptions import InvalidStepError, ResolutionError

from .registry import as_resolver
from .step import Step, normalize_catch
from .types import StepAdapter

if TYPE_CHECKING:
    from atlas_railway.core.engine.sequence import Sequence


@dataclass(frozen=True)
class StepSpec:
    """Declaração de um Step ainda não resolvido."""

    kind: StepAdapter
    name: str
    with_: Optional[str] = None
    catch: tuple = ()

    @property
    def identifier(self) -> str:
        return self.with_ or self.name


def _resolve_operation(resolver: Any, spec: StepSpec) -> Any:
    try:
        operation = resolver.resolve(spec.identifier)
    except LookupError as exc:
        raise ResolutionError(
            f"Operação não registrada: {spec.identifier}",
            details={"identifier": spec.identifier, "step": spec.name},
        ) from exc

    if not callable(operation):
        raise ResolutionError(
            f"Operação '{spec.identifier}' não é chamável",
            details={"identifier": spec.identifier, "step": spec.name},
        )
    return operation


def resolve_step(spec: StepSpec, resolver: Any) -> Step:
    resolver = as_resolver(resolver)
    return Step(
        name=spec.name,
        adapter=spec.kind,
        operation=_resolve_operation(resolver, spec),
        catch=spec.catch,
        identifier=spec.identifier,
    )


@dataclass
class SequenceBuilder:
    """Builder fluente; `build` pode ser chamado várias vezes (resolvers distintos)."""

    specs: List[StepSpec] = field(default_factory=list)

    def add(self, kind: Any, name: str, *, with_: Optional[str] = None, catch: Any = ()) -> "SequenceBuilder":
        try:
            adapter = StepAdapter.from_kind(kind)
        except ValueError as exc:
            raise InvalidStepError(str(exc), details={"step": name}) from exc
        self.specs.append(StepSpec(adapter, name, with_, normalize_catch(catch)))
        return self

    def step(self, name: str, *, with_: Optional[str] = None) -> "SequenceBuilder":
        return self.add(StepAdapter.DIRECT, name, with_=with_)

    def map(self, name: str, *, with_: Optional[str] = None) -> "SequenceBuilder":
        return self.add(StepAdapter.MAP, name, with_=with_)

    def try_(self, name: str, *, catch: Any, with_: Optional[str] = None) -> "SequenceBuilder":
        return self.add(StepAdapter.TRY, name, with_=with_, catch=catch)

    def tee(self, name: str, *, with_: Optional[str] = None, catch: Any = ()) -> "SequenceBuilder":
        return self.add(StepAdapter.TEE, name, with_=with_, catch=catch)

    def build(self, resolver: Any) -> "Sequence":
        from atlas_railway.core.engine.sequence import Sequence

        resolver = as_resolver(resolver)
        return Sequence([resolve_step(spec, resolver) for spec in self.specs])


def build_sequence(specs: Iterable[Mapping[str, Any]], resolver: Any) -> "Sequence":
    """Constrói a partir de dicts `{kind, name, with?, catch?}` (`kind` default: "step")."""
    builder = SequenceBuilder()
    for raw in specs:
        raw = dict(raw)
        name = raw.get("name")
        if not isinstance(name, str):
            raise InvalidStepError("Especificação de Step sem 'name'", details={"spec": raw})
        builder.add(raw.get("kind", StepAdapter.DIRECT.value), name, with_=raw.get("with"), catch=raw.get("catch") or ())
    return builder.build(resolver)


# ----------------------------------------------------------------------
# Config declarativa
# ----------------------------------------------------------------------
def _is_enabled(config: Mapping[str, Any], step_name: str) -> bool:
    steps_cfg = config.get("steps", {}) or {}
    step_cfg = steps_cfg.get(step_name, {}) or {}
    return bool(step_cfg.get("enabled", True))


def _resolve_catch(entries: Any, resolver: Any, step_name: str) -> List[type]:
    if entries is None:
        return []
    if isinstance(entries, str):
        entries = [entries]
    if not isinstance(entries, list):
        raise InvalidSequenceConfigError(
            f"catch do step '{step_name}' deve ser lista de identificadores",
            details={"step": step_name},
        )

    kinds: List[type] = []
    for identifier in entries:
        try:
            kind = resolver.resolve(identifier)
        except (ResolutionError, LookupError) as exc:
            raise InvalidSequenceConfigError(
                f"catch '{identifier}' do step '{step_name}' não foi resolvido",
                details={"step": step_name, "catch": identifier},
            ) from exc
        if not (isinstance(kind, type) and issubclass(kind, BaseException)):
            raise InvalidSequenceConfigError(
                f"catch '{identifier}' do step '{step_name}' não é classe de exceção",
                details={"step": step_name, "catch": identifier},
            )
        kinds.append(kind)
    return kinds


def build_sequence_from_config(config: Mapping[str, Any], resolver: Any) -> "Sequence":
    """
    Constrói a Sequence declarada em `config["sequence"]["steps"]`.

    Raises:
        InvalidSequenceConfigError: Seção ausente/mal formada, `kind` desconhecido
            ou `catch` inválido.
        ResolutionError: Operação não encontrada no resolver.
        DuplicateStepNameError: Nomes repetidos na lista de Steps.
    """
    resolver = as_resolver(resolver)
    section = config.get("sequence")
    if not isinstance(section, dict) or not isinstance(section.get("steps"), list):
        raise InvalidSequenceConfigError(
            "config.sequence.steps deve ser uma lista",
            hint="Declare 'sequence: {steps: [...]}' no arquivo de configuração.",
        )

    specs: List[Dict[str, Any]] = []
    for position, raw in enumerate(section["steps"]):
        if not isinstance(raw, dict) or not isinstance(raw.get("name"), str):
            raise InvalidSequenceConfigError(
                f"sequence.steps[{position}] deve ser um mapa com 'name'",
                details={"position": position},
            )
        try:
            StepAdapter.from_kind(raw.get("kind", StepAdapter.DIRECT.value))
        except ValueError as exc:
            raise InvalidSequenceConfigError(
                str(exc),
                details={"position": position, "step": raw["name"]},
            ) from exc
        if not _is_enabled(config, raw["name"]):
            continue
        spec = dict(raw)
        spec["catch"] = _resolve_catch(raw.get("catch"), resolver, raw["name"])
        specs.append(spec)

    return build_sequence(specs, resolver)
