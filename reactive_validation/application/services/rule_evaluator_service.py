"""RuleEvaluatorService for running the rules of a property.

This service invokes the rules registered for a property against the
current entity values. It handles:
- Ordering: sync rules, async rules, sync group rules, async group rules
- Implicit filtering: setter-triggered passes only run implicit rules
- Group deduplication: a group rule runs at most once per pass
- Fault wrapping: exceptions from rule logic become RuleExecutionError

The service never writes into the message store.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Optional

from ...const import DEFAULT_ERROR_MESSAGE
from ...domain.exceptions import RuleExecutionError
from ...domain.interfaces import IGroupValidationRule, IValidationRule
from ...domain.value_objects import ValidationMessage
from ...infrastructure.decorators import log_validation_errors
from ...validation import (
    AsyncValidationRule,
    RuleRegistry,
    SyncValidationRule,
    ValidationContext,
    ValidationResult,
)
from .property_evaluation import PropertyEvaluation

_LOGGER = logging.getLogger(__name__)

SeenGroups = dict[IGroupValidationRule, Optional[ValidationMessage]]


class RuleEvaluatorService:
    """Service evaluating registered rules against an entity.

    A validation pass shares one ``seen_groups`` dictionary between all
    the properties it evaluates. A group rule found there is skipped, and
    every evaluated group rule is recorded in it, with None when it
    passed so the caller can clear a previous group message.

    Example:
        >>> evaluator = RuleEvaluatorService(registry)
        >>> seen = {}
        >>> evaluation = await evaluator.evaluate_property(bid, "NewBid", seen_groups=seen)
        >>> evaluation.is_valid
        False
    """

    def __init__(self, registry: RuleRegistry) -> None:
        """Initialize rule evaluator.

        Args:
            registry: Rules of the entity type
        """
        self._registry = registry

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    @log_validation_errors("Property validation", logger=_LOGGER)
    async def evaluate_property(
        self,
        entity: Any,
        property_name: str,
        include_all_rules: bool = False,
        seen_groups: Optional[SeenGroups] = None,
        items: Optional[dict[str, Any]] = None,
    ) -> PropertyEvaluation:
        """Evaluate all rules of one property.

        Every failing rule contributes its message; evaluation does not
        stop at the first failure.

        Args:
            entity: Entity being validated
            property_name: Property to evaluate
            include_all_rules: Also run rules not used in implicit validation
            seen_groups: Group rules already evaluated in this pass
            items: Scratch space shared by the rules of this pass

        Returns:
            PropertyEvaluation with messages, group messages and validity

        Raises:
            RuleExecutionError: If a rule raised or returned a non-result
        """
        if seen_groups is None:
            seen_groups = {}
        if items is None:
            items = {}

        evaluation = PropertyEvaluation(property_name)
        rules = self._select(self._registry.property_rules(property_name), include_all_rules)

        if rules:
            context = ValidationContext(entity, property_name, items)
            value = context.get_property_value(property_name)

            for rule in self._in_check_order(rules):
                result = await self._run_rule(rule, value, context, property_name)
                if not result.valid:
                    evaluation.is_valid = False
                    evaluation.messages.extend(self._property_messages(rule, result))

        group_rules = self._select(self._registry.group_rules_for(property_name), include_all_rules)
        for rule in self._in_check_order(group_rules):
            if rule in seen_groups:
                continue
            valid, message = await self._evaluate_group(entity, rule, items, property_name)
            seen_groups[rule] = message
            evaluation.group_messages[rule] = message
            evaluation.is_valid = evaluation.is_valid and valid

        _LOGGER.debug(
            "Evaluated property '%s': valid=%s, %d messages, %d group results",
            property_name,
            evaluation.is_valid,
            len(evaluation.messages),
            len(evaluation.group_messages),
        )
        return evaluation

    @log_validation_errors("Group validation", logger=_LOGGER)
    async def evaluate_group_rules(
        self,
        entity: Any,
        rules: Iterable[IGroupValidationRule],
        seen_groups: SeenGroups,
        include_all_rules: bool = True,
        items: Optional[dict[str, Any]] = None,
    ) -> bool:
        """Evaluate group rules not yet seen in this pass.

        Used by a full pass for group rules no evaluated property is
        causative for, e.g. entity-wide rules.

        Returns:
            True if every evaluated group rule passed
        """
        if items is None:
            items = {}

        is_valid = True
        for rule in self._in_check_order(self._select(rules, include_all_rules)):
            if rule in seen_groups:
                continue
            valid, message = await self._evaluate_group(entity, rule, items, None)
            seen_groups[rule] = message
            is_valid = is_valid and valid
        return is_valid

    async def _evaluate_group(
        self,
        entity: Any,
        rule: IGroupValidationRule,
        items: dict[str, Any],
        property_name: Optional[str],
    ) -> tuple[bool, Optional[ValidationMessage]]:
        context = ValidationContext(entity, None, items)
        result = await self._run_rule(rule, entity, context, property_name)
        if result.valid:
            return True, None

        text = " ".join(result.errors) or getattr(rule, "error_message", DEFAULT_ERROR_MESSAGE)
        return False, self._build_message(rule, text)

    async def _run_rule(
        self,
        rule: IValidationRule,
        value: Any,
        context: ValidationContext,
        property_name: Optional[str],
    ) -> ValidationResult:
        try:
            if isinstance(rule, AsyncValidationRule):
                result = await rule.check_async(value, context)
            else:
                result = rule.check(value, context)
        except asyncio.CancelledError as err:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            # Something the rule awaited was cancelled, the pass itself was not
            raise RuleExecutionError(rule, property_name, err) from err
        except Exception as err:
            raise RuleExecutionError(rule, property_name, err) from err

        if not isinstance(result, ValidationResult):
            raise RuleExecutionError(
                rule,
                property_name,
                TypeError(f"expected ValidationResult, got {type(result).__name__}"),
            )
        return result

    def _property_messages(
        self, rule: IValidationRule, result: ValidationResult
    ) -> list[ValidationMessage]:
        texts = result.errors or [getattr(rule, "error_message", DEFAULT_ERROR_MESSAGE)]
        return [self._build_message(rule, text) for text in texts]

    @staticmethod
    def _build_message(rule: IValidationRule, text: str) -> ValidationMessage:
        return ValidationMessage(
            rule.level,
            text,
            show_on_property=rule.show_on_property,
            show_in_summary=rule.show_in_summary,
        )

    @staticmethod
    def _select(rules: Iterable[IValidationRule], include_all_rules: bool) -> list:
        if include_all_rules:
            return list(rules)
        return [rule for rule in rules if rule.use_in_implicit_validation]

    @staticmethod
    def _in_check_order(rules: list) -> list:
        """Sync rules first, then async rules, registration order within each."""
        sync_rules = [rule for rule in rules if isinstance(rule, SyncValidationRule)]
        async_rules = [rule for rule in rules if isinstance(rule, AsyncValidationRule)]
        return sync_rules + async_rules
