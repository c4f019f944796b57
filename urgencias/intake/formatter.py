"""
CUIL 输入框的逐键格式化。

transition() 是纯函数：原始输入 → 新状态。
CuilInput 只是把"当前状态"挂在某一个表单字段上，逻辑全在 transition()。
"""

from .. import cuil
from .types import INITIAL_IDENTIFIER_STATE, FormattedIdentifierState, Validity


def transition(raw: str | None) -> FormattedIdentifierState:
    """
    每敲一次键调用一次。

    不满 11 位时不做有效性判断（用户还在输入），validity 一律 UNKNOWN。
    任何输入都不会抛异常：乱码只会变成更短的数字串。
    """
    digits = cuil.normalize(raw)
    displayed = cuil.format_cuil(digits)

    if len(digits) == cuil.CUIL_LENGTH:
        validity = Validity.VALID if cuil.is_valid(digits) else Validity.INVALID
    else:
        validity = Validity.UNKNOWN

    return FormattedIdentifierState(value=displayed, validity=validity)


class CuilInput:
    """单个 CUIL 字段的状态持有者。每个表单字段一个实例，不共享。"""

    def __init__(self, initial: str = ""):
        self.state = transition(initial) if initial else INITIAL_IDENTIFIER_STATE

    @property
    def value(self) -> str:
        return self.state.value

    @property
    def validity(self) -> Validity:
        return self.state.validity

    def handle_change(self, raw: str | None) -> FormattedIdentifierState:
        self.state = transition(raw)
        return self.state

    def reset(self) -> None:
        self.state = INITIAL_IDENTIFIER_STATE
