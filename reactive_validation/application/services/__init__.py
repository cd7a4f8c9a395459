"""Application services for the validation engine.

Each service focuses on one capability of the engine:
- RuleEvaluatorService: runs the rules of a property or group
- MessageStoreService: holds current messages and detects changes
- ValidationSequencerService: runs requests one at a time in issue order
- ChangeNotifierService: tells subscribers which messages changed

One class per file.
"""

from .apply_mode import ApplyMode
from .property_evaluation import PropertyEvaluation
from .rule_evaluator_service import RuleEvaluatorService
from .message_store_service import ENTITY_MESSAGE_KEY, MessageStoreService
from .validation_sequencer_service import ValidationSequencerService
from .change_notifier_service import ChangeNotifierService

__all__ = [
    "ApplyMode",
    "PropertyEvaluation",
    "RuleEvaluatorService",
    "ENTITY_MESSAGE_KEY",
    "MessageStoreService",
    "ValidationSequencerService",
    "ChangeNotifierService",
]
