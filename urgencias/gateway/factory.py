"""
工厂函数：根据 settings.INTAKE_GATEWAY 返回对应的 Gateway 实例。

新增实现只需：
  1. 在 clients.py 新建 XxxGateway(BaseIntakeGateway) 类
  2. 在此处 _build_registry() 加一行
"""

from django.conf import settings

from .base import BaseIntakeGateway


def _build_registry() -> dict[str, type[BaseIntakeGateway]]:
    # 延迟导入，避免在 Django 启动前触发 requests import
    from .clients import HttpIntakeGateway

    return {
        "http": HttpIntakeGateway,
    }


def get_gateway() -> BaseIntakeGateway:
    """
    从 settings.INTAKE_GATEWAY 读取实现名，返回实例。

    Raises:
        ValueError: INTAKE_GATEWAY 未知
    """
    name = getattr(settings, "INTAKE_GATEWAY", "http")
    registry = _build_registry()
    gateway_cls = registry.get(name)

    if gateway_cls is None:
        raise ValueError(
            f"Unknown INTAKE_GATEWAY: {name!r}. "
            f"Known gateways: {list(registry.keys())}"
        )

    return gateway_cls()
