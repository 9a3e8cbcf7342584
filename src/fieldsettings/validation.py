"""
Validation of settings documents before they are persisted.

A rule set comes from the owning record, per field. It is one of:

- None: nothing to check.
- A pydantic model class describing the whole document.
- A mapping of dot paths to rules. Each rule is a type annotation that
  pydantic can validate, e.g. ``Literal["light", "dark"]``, ``bool`` or
  ``Annotated[int, pydantic.Field(ge=1)]``. Paths missing from the
  document are skipped unless the rule is wrapped in Required().

Validators are injected into stores; nothing here is global.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import pydantic as _pydantic

import fieldsettings.errors as errors
import fieldsettings.utils.dot_path as dot_path

RuleSet: _typing.TypeAlias = "_abc.Mapping[str, _typing.Any] | type[_pydantic.BaseModel] | None"


class Required:
    """Marks a path rule as mandatory: a missing path is a violation."""

    __slots__ = ("rule",)

    def __init__(self, rule: _typing.Any = _typing.Any) -> None:
        self.rule = rule

    def __repr__(self) -> str:
        return f"Required({self.rule!r})"


@_typing.runtime_checkable
class Validator(_typing.Protocol):
    """Checks a document against a rule set."""

    def validate(
        self,
        document: _abc.Mapping[str, _typing.Any],
        rules: RuleSet,
        *,
        field: str | None = None,
    ) -> None:
        """Raise errors.ValidationError if the document breaks a rule."""
        ...


class NullValidator:
    """Accepts every document."""

    def validate(
        self,
        document: _abc.Mapping[str, _typing.Any],  # noqa: ARG002
        rules: RuleSet,  # noqa: ARG002
        *,
        field: str | None = None,  # noqa: ARG002
    ) -> None:
        return None


def _is_model_rules(rules: _typing.Any) -> bool:
    return isinstance(rules, type) and issubclass(rules, _pydantic.BaseModel)


class PydanticValidator:
    """
    Validator backed by pydantic.

    Path rules are checked in strict mode so that, for example, the string
    "1" does not satisfy an ``int`` rule. Every violation in the document
    is collected before a single ValidationError is raised.
    """

    def __init__(
        self,
        *,
        delimiter: str = dot_path.DEFAULT_DELIMITER,
        strict: bool = True,
    ) -> None:
        """
        Initialize the validator.

        Args:
            delimiter: Path delimiter used for rule paths and error reports.
            strict: Validate path rules in pydantic strict mode.
        """
        self._delimiter = delimiter
        self._strict = strict
        self._adapters: dict[_typing.Any, _pydantic.TypeAdapter[_typing.Any]] = {}

    def validate(
        self,
        document: _abc.Mapping[str, _typing.Any],
        rules: RuleSet,
        *,
        field: str | None = None,
    ) -> None:
        if rules is None:
            return

        if _is_model_rules(rules):
            violations = self._validate_model(document, rules)
        elif isinstance(rules, _abc.Mapping):
            violations = self._validate_paths(document, rules)
        else:
            raise errors.ConfigurationError(
                f"Unsupported rule set type: {type(rules).__name__}",
                field=field,
            )

        if violations:
            raise errors.ValidationError(violations, field=field)

    def _validate_model(
        self,
        document: _abc.Mapping[str, _typing.Any],
        model: type[_pydantic.BaseModel],
    ) -> dict[str, list[str]]:
        try:
            model.model_validate(dict(document))
        except _pydantic.ValidationError as e:
            return self._collect(e, prefix="")
        return {}

    def _validate_paths(
        self,
        document: _abc.Mapping[str, _typing.Any],
        rules: _abc.Mapping[str, _typing.Any],
    ) -> dict[str, list[str]]:
        violations: dict[str, list[str]] = {}
        for path, rule in rules.items():
            required = isinstance(rule, Required)
            if required:
                rule = rule.rule

            if not dot_path.has(document, path, self._delimiter):
                if required:
                    violations.setdefault(path, []).append("Field required")
                continue

            value = dot_path.get(document, path, delimiter=self._delimiter)
            try:
                self._adapter_for(rule).validate_python(value, strict=self._strict)
            except _pydantic.ValidationError as e:
                for error_path, messages in self._collect(e, prefix=path).items():
                    violations.setdefault(error_path, []).extend(messages)
        return violations

    def _adapter_for(self, rule: _typing.Any) -> _pydantic.TypeAdapter[_typing.Any]:
        """Return a (cached) TypeAdapter for a rule annotation."""
        try:
            adapter = self._adapters.get(rule)
        except TypeError:
            # Unhashable annotation - build it every time
            return _pydantic.TypeAdapter(rule)
        if adapter is None:
            adapter = _pydantic.TypeAdapter(rule)
            self._adapters[rule] = adapter
        return adapter

    def _collect(
        self,
        error: _pydantic.ValidationError,
        *,
        prefix: str,
    ) -> dict[str, list[str]]:
        """Turn pydantic errors into dot path → messages."""
        violations: dict[str, list[str]] = {}
        for detail in error.errors():
            loc = [str(part) for part in detail.get("loc", ())]
            path = self._delimiter.join([prefix, *loc] if prefix else loc)
            violations.setdefault(path, []).append(detail["msg"])
        return violations
