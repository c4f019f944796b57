"""
CUIL 工具函数 — 规范化、格式化、校验位验证。

纯函数，无副作用，不做任何 I/O。
formatter / assembler / adapters 都从这里取，不要在别处重复实现校验算法。

CUIL 结构（11 位数字）：
  DD-DDDDDDDD-D
  前缀(2)  主体(8)  校验位(1)
"""

import re

CUIL_LENGTH = 11

# 前 10 位的权重，从左到右
WEIGHTS = (5, 4, 3, 2, 7, 6, 5, 4, 3, 2)

# 只认 ASCII 数字，全角 / 其他文字的数字一律当噪音去掉
_NON_DIGIT_RE = re.compile(r"[^0-9]")
_DIGITS_RE = re.compile(r"[0-9]{11}")
_FORMATTED_RE = re.compile(r"([0-9]{2})-([0-9]{8})-([0-9])")


def normalize(raw: str | None) -> str:
    """
    去掉所有非数字字符，最多保留 11 位。

    超出部分直接丢弃（边打字边格式化时多敲的键不算错误）。
    幂等：normalize(normalize(x)) == normalize(x)
    """
    digits = _NON_DIGIT_RE.sub("", raw or "")
    return digits[:CUIL_LENGTH]


def format_cuil(digits: str) -> str:
    """
    按已输入的位数逐步加连字符：
      0–2 位   → 原样
      3–10 位  → DD-REST
      11 位    → DD-DDDDDDDD-D
    对任意位数都有定义，永不失败。
    """
    if len(digits) <= 2:
        return digits
    if len(digits) < CUIL_LENGTH:
        return f"{digits[:2]}-{digits[2:]}"
    return f"{digits[:2]}-{digits[2:10]}-{digits[10:]}"


def check_digit(ten_digits: str) -> int | None:
    """
    由前 10 位算出期望的校验位。

    返回 None 表示这个前缀不存在合法校验位（11 - 余数 == 10），
    此时无论最后一位填什么都判为无效。
    """
    total = sum(int(d) * w for d, w in zip(ten_digits, WEIGHTS))
    expected = 11 - total % 11
    if expected == 11:
        return 0
    if expected == 10:
        return None
    return expected


def is_valid(eleven_digits: str) -> bool:
    """不是恰好 11 位数字就直接 False，不当作"未输完"处理。"""
    if not isinstance(eleven_digits, str) or not _DIGITS_RE.fullmatch(eleven_digits):
        return False
    expected = check_digit(eleven_digits[:10])
    if expected is None:
        return False
    return expected == int(eleven_digits[10])


def is_valid_formatted(value: str) -> bool:
    """接受 DD-DDDDDDDD-D 或裸 11 位数字，其他形状一律 False。"""
    value = (value or "").strip()
    match = _FORMATTED_RE.fullmatch(value)
    if match:
        return is_valid("".join(match.groups()))
    return is_valid(value)


def mask(value: str | None) -> str:
    """日志里只露最后 4 位。"""
    digits = normalize(value)
    if len(digits) <= 4:
        return "*" * len(digits)
    return "*" * (len(digits) - 4) + digits[-4:]
