"""Tracking of selected options and revealed (checked) questions."""
from __future__ import annotations

import logging

log = logging.getLogger(__name__)


class AnswerTracker:
    """
    Selected original option indices per question id.

    Checked questions are locked: select() leaves them untouched until the
    check is toggled off again.
    """

    def __init__(self) -> None:
        self._selections: dict[int, list[int]] = {}
        self._checked: dict[int, bool] = {}

    def select(
        self,
        question_id: int,
        original_index: int,
        expected_answers: int,
        option_count: int | None = None,
    ) -> list[int]:
        if self._checked.get(question_id):
            return self.selected(question_id)
        if original_index < 0 or (option_count is not None and original_index >= option_count):
            log.warning(
                "Ignoring option %s for question %s: out of range", original_index, question_id
            )
            return self.selected(question_id)

        current = self._selections.setdefault(question_id, [])
        if expected_answers == 1:
            self._selections[question_id] = [original_index]
        elif original_index in current:
            current.remove(original_index)
        else:
            current.append(original_index)
        return self.selected(question_id)

    def selected(self, question_id: int) -> list[int]:
        return list(self._selections.get(question_id, []))

    def has_selection(self, question_id: int) -> bool:
        return bool(self._selections.get(question_id))

    def toggle_check(self, question_id: int) -> bool:
        if self._checked.get(question_id):
            del self._checked[question_id]
            return False
        self._checked[question_id] = True
        return True

    def is_checked(self, question_id: int) -> bool:
        return bool(self._checked.get(question_id))

    def reset(self) -> None:
        self._selections.clear()
        self._checked.clear()
