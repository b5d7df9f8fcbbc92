"""
Goal Tracker 异常定义模块。

异常层次：
- TrackerError: 基类，所有预期内的错误
- ConfigError: 运行时配置错误
- StorageError: 集合文件无法读写或格式损坏
- NotFoundError: 集合中不存在该 id
- DuplicateError: 违反唯一性约束 (标签名、记录 id)
- ValidationError: 记录结构与领域模型不符
"""
from typing import Optional


class TrackerError(Exception):
    """Goal Tracker 基础异常类。

    捕获此类即可处理所有预期的错误；路由层把它翻译成 HTTP 状态码。
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        """
        Args:
            message: 错误描述
            hint: 对用户的操作建议
        """
        super().__init__(message)
        self.message = message
        self.hint = hint

    def get_user_message(self) -> str:
        """返回给用户看的错误消息。"""
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class ConfigError(TrackerError):
    """runtime.yaml 缺失或格式错误。"""

    def __init__(self, message: str, config_path: Optional[str] = None):
        hint = f"Check the config file: {config_path}" if config_path else "Check the config file format"
        super().__init__(message, hint)
        self.config_path = config_path


class StorageError(TrackerError):
    """集合文件读写失败。

    JSON 损坏和 I/O 错误都归为此类，HTTP 500。
    """

    def __init__(self, message: str, path: Optional[str] = None):
        hint = f"Inspect or restore {path}" if path else None
        super().__init__(message, hint)
        self.path = path


class NotFoundError(TrackerError):
    """记录不存在，HTTP 404。"""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id


class DuplicateError(TrackerError):
    """唯一性冲突，HTTP 400。"""

    def __init__(self, message: str):
        super().__init__(message, hint=None)


class ValidationError(TrackerError):
    """记录不符合领域模型，HTTP 400。"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, hint=None)
        self.field = field
