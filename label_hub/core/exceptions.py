# label_hub/core/exceptions.py
"""
本模块定义了 Label-Hub 项目中所有自定义的、语义化的异常类型。

“标签缺失”不是异常：作用域不存在时返回 `labels=None`，部分缺失的叶子节点
只是映射中不存在的键。只有基础设施故障（存储、数据加载）和结构性错误才会
以异常的形式出现。
"""


class LabelHubError(Exception):
    """
    所有 Label-Hub 自定义异常的通用基类。
    捕获此异常可以处理所有源自本项目的预期错误。
    """

    pass


class ConfigurationError(LabelHubError):
    """
    表示在加载、解析或验证配置时发生的错误。
    例如，数据库 URL 指向一个不受支持的驱动。
    """

    pass


class StoreIOError(LabelHubError):
    """
    表示标签记录存储本身无法响应（连接失败、查询失败等）。
    这与“找不到标签”截然不同，它意味着系统本身不健康，必须向上层传播。
    """

    pass


class DataPayloadError(LabelHubError):
    """
    表示视图的领域数据加载器失败。
    它被单独报告在 `ViewResult.data_error` 上，不会抑制已成功解析的标签包。
    """

    def __init__(self, message: str, *, view: str | None = None) -> None:
        super().__init__(message)
        self.view = view


class BundleSchemaError(LabelHubError):
    """表示构建出的标签包与其声明的类型化 schema 不符。"""

    def __init__(
        self, message: str, *, scope: str, errors: list[dict] | None = None
    ) -> None:
        super().__init__(message)
        self.scope = scope
        self.errors = errors or []


class ViewTimeoutError(LabelHubError, TimeoutError):
    """
    表示一次视图获取超过了配置的超时时间。
    继承自 TimeoutError 是为了保持与 asyncio 超时行为的一致性。
    """

    pass
