# spending_planner/utils/errors.py
class UserInputError(RuntimeError):
    """
    Raised for invalid user-provided input (incomes, events, state files).
    Should NOT print traceback.
    """


class TimelineValidationError(UserInputError, ValueError):
    """
    calculate_timeline() 拒绝的输入：
      - weeks < 0
      - proration factor 不在 (0, 1]
      - 未知 currency / 负 amount / 重复 id
    """


class CorruptChainError(RuntimeError):
    """
    Chain links violate the priority-monotonicity invariant
    (dangling reference, cycle, link to a later-or-equal priority).

    Indicates a data-integrity bug in the caller; never swallowed.
    """
