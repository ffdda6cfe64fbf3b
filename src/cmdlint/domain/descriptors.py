"""Command descriptor models.

A descriptor is an immutable snapshot of one command's shape as reported
by the shell: its name, declared parameters, parameter sets, output types
and (for source-visible commands) the raw definition text. Descriptors are
created by a provider and never mutated by rules.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

from cmdlint.domain.types import CommandKind

# Int32.MinValue, the shell's marker for "no position".
NOT_POSITIONAL = -2147483648

# Membership marker for parameters that belong to every parameter set.
ALL_PARAMETER_SETS = "__AllParameterSets"

COMMON_PARAMETERS: frozenset[str] = frozenset(
    {
        "Verbose",
        "Debug",
        "ErrorAction",
        "WarningAction",
        "InformationAction",
        "ErrorVariable",
        "WarningVariable",
        "InformationVariable",
        "OutVariable",
        "OutBuffer",
        "PipelineVariable",
        "UseTransaction",
        "Confirm",
        "WhatIf",
    }
)

_COMMON_LOWER = frozenset(n.lower() for n in COMMON_PARAMETERS)


def is_common_parameter(name: str) -> bool:
    """Case-insensitive membership in :data:`COMMON_PARAMETERS`."""
    return name.lower() in _COMMON_LOWER


class ParameterAttributes(BaseModel):
    """Binding attributes declared on a parameter."""

    model_config = {"frozen": True}

    mandatory: bool = False
    position: int = NOT_POSITIONAL
    value_from_pipeline: bool = False
    value_from_pipeline_by_property_name: bool = False
    dont_show: bool = False
    min_range: float | None = None
    max_range: float | None = None
    valid_values: frozenset[str] | None = None


class ParameterDescriptor(BaseModel):
    """One declared parameter."""

    model_config = {"frozen": True}

    name: str
    type: str = "System.Object"
    aliases: frozenset[str] = Field(default_factory=frozenset)
    attributes: ParameterAttributes = Field(default_factory=ParameterAttributes)
    member_of_sets: frozenset[str] = Field(default_factory=frozenset)

    @property
    def is_positional(self) -> bool:
        return self.attributes.position != NOT_POSITIONAL

    @property
    def accepts_pipeline(self) -> bool:
        attrs = self.attributes
        return attrs.value_from_pipeline or attrs.value_from_pipeline_by_property_name

    @property
    def in_all_sets(self) -> bool:
        return not self.member_of_sets or ALL_PARAMETER_SETS in self.member_of_sets

    def in_set(self, set_name: str) -> bool:
        """Whether this parameter can be bound in parameter set *set_name*."""
        return self.in_all_sets or set_name in self.member_of_sets

    def has_alias(self, alias: str) -> bool:
        lowered = alias.lower()
        return any(a.lower() == lowered for a in self.aliases)


class ParameterSetDescriptor(BaseModel):
    """A named, mutually exclusive grouping of parameters."""

    model_config = {"frozen": True}

    name: str
    is_default: bool = False
    parameter_names: tuple[str, ...] = ()


class CommandDescriptor(BaseModel):
    """Immutable snapshot of one callable command.

    Attributes:
        name: Full command name, normally ``Verb-Noun``.
        verb: Part before the first hyphen (derived from *name* if omitted).
        noun: Part after the first hyphen (derived from *name* if omitted).
        kind: Function, alias or compiled command.
        parameters: Parameters the command itself declares, in declaration
            order. Engine-supplied common parameters are not listed; see
            *supports_common_parameters* and *supports_should_process*.
        parameter_sets: Declared parameter sets. When empty, every
            parameter belongs to one implicit set.
        default_parameter_set: Name of the declared default set, if any.
        output_types: Declared output type names.
        help_uri: Online help link.
        raw_definition_text: Source text, present only for source-visible
            commands.
    """

    model_config = {"frozen": True}

    name: str
    verb: str = ""
    noun: str = ""
    kind: CommandKind = CommandKind.FUNCTION
    parameters: tuple[ParameterDescriptor, ...] = ()
    parameter_sets: tuple[ParameterSetDescriptor, ...] = ()
    default_parameter_set: str | None = None
    output_types: frozenset[str] = Field(default_factory=frozenset)
    help_uri: str | None = None
    raw_definition_text: str | None = None
    supports_common_parameters: bool = False
    supports_should_process: bool = False

    @model_validator(mode="before")
    @classmethod
    def _split_name(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        name = str(data.get("name", ""))
        verb, sep, noun = name.partition("-")
        if not data.get("verb"):
            data = {**data, "verb": verb if sep else ""}
        if not data.get("noun"):
            data = {**data, "noun": noun if sep else name}
        return data

    # ------------------------------------------------------------------
    # Parameter lookup
    # ------------------------------------------------------------------

    @property
    def user_parameters(self) -> tuple[ParameterDescriptor, ...]:
        """Declared parameters that are not common parameter names."""
        return tuple(p for p in self.parameters if not is_common_parameter(p.name))

    def parameter(self, name: str) -> ParameterDescriptor | None:
        """Return the declared parameter called *name* (case-insensitive)."""
        lowered = name.lower()
        for param in self.parameters:
            if param.name.lower() == lowered:
                return param
        return None

    def has_parameter(self, name: str) -> bool:
        """Whether *name* can be passed, counting engine-supplied parameters."""
        if self.parameter(name) is not None:
            return True
        lowered = name.lower()
        if self.supports_should_process and lowered in {"confirm", "whatif"}:
            return True
        return (
            self.supports_common_parameters
            and lowered in _COMMON_LOWER
            and lowered not in {"confirm", "whatif", "usetransaction"}
        )

    # ------------------------------------------------------------------
    # Parameter sets
    # ------------------------------------------------------------------

    def set_names(self) -> list[str]:
        """Names of every parameter set, declared or referenced.

        Commands without named sets have the single implicit set
        :data:`ALL_PARAMETER_SETS`.
        """
        names: list[str] = [s.name for s in self.parameter_sets]
        for param in self.parameters:
            for set_name in sorted(param.member_of_sets):
                if set_name != ALL_PARAMETER_SETS and set_name not in names:
                    names.append(set_name)
        return names or [ALL_PARAMETER_SETS]

    def parameters_in_set(self, set_name: str) -> list[ParameterDescriptor]:
        """Declared parameters bindable in *set_name*, in declaration order."""
        if set_name == ALL_PARAMETER_SETS:
            return list(self.parameters)
        return [p for p in self.parameters if p.in_set(set_name)]

    @property
    def effective_default_set(self) -> str | None:
        """Declared default set, or the single set when only one exists."""
        if self.default_parameter_set:
            return self.default_parameter_set
        for pset in self.parameter_sets:
            if pset.is_default:
                return pset.name
        names = self.set_names()
        if len(names) == 1:
            return names[0]
        return None
