"""
工厂函数：根据来源字符串返回对应 Adapter 类。

新增数据源只需：
  1. 在 adapters.py 新建 Adapter 类
  2. 在此处 _build_registry() 加一行
  不需要修改任何业务代码。
"""

from ..exceptions import ValidationError
from .base import BaseIntakeAdapter

DEFAULT_SOURCE = "form"


# ── 注册表 ──────────────────────────────────────────────────────────────────
# key: source 字符串（来自 HTTP Header X-Intake-Source，缺省为 "form"）
# value: Adapter 类（未实例化）
def _build_registry() -> dict[str, type[BaseIntakeAdapter]]:
    # 延迟导入，避免循环依赖
    from .adapters import IntakeApiAdapter, UrgenciaFormAdapter

    return {
        "form": UrgenciaFormAdapter,
        "api":  IntakeApiAdapter,
    }


def get_adapter(source: str | None, raw_body: bytes | str | dict, content_type: str = "") -> BaseIntakeAdapter:
    """
    根据 source 返回已实例化的 Adapter。

    Args:
        source:       数据来源标识，例如 "form"、"api"；空值按 "form" 处理
        raw_body:     原始请求体（bytes / str / 已解析的 dict）
        content_type: HTTP Content-Type，Adapter 内部可按需使用

    Raises:
        ValidationError: 未知的 source
    """
    source = (source or DEFAULT_SOURCE).strip().lower()
    registry = _build_registry()
    adapter_cls = registry.get(source)

    if adapter_cls is None:
        raise ValidationError(
            message=f"Unknown intake source: {source!r}.",
            code="UNKNOWN_SOURCE",
            detail={"known_sources": list(registry.keys())},
        )

    return adapter_cls(raw_body=raw_body, content_type=content_type)
