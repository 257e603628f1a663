"""任务数据源异常体系

加载器捕获这些异常并转为用户可见的错误信息，不会向上抛出。
"""


class TaskSourceError(Exception):
    """数据源基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述（直接作为用户可见的错误信息）
            recoverable: 是否可通过重试恢复
        """
        super().__init__(message)
        self.message = message
        self.recoverable = recoverable


class SourceUnreachableError(TaskSourceError):
    """数据源不可达（连接失败、超时、文件不存在等）"""

    def __init__(self, location: str, original_error: Exception) -> None:
        super().__init__(
            f"任务数据源不可达: {location} -- {original_error}",
            recoverable=True,
        )
        self.location = location
        self.original_error = original_error


class SourceStatusError(TaskSourceError):
    """HTTP 数据源返回非 2xx 状态码"""

    def __init__(self, location: str, status_code: int) -> None:
        super().__init__(
            f"加载任务数据失败: {location} ({status_code})",
            recoverable=status_code >= 500,
        )
        self.location = location
        self.status_code = status_code


class MalformedSourceError(TaskSourceError):
    """数据源返回的内容无法解析为任务记录数组"""

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(
            f"任务数据格式错误: {location} -- {reason}",
            recoverable=False,
        )
        self.location = location
        self.reason = reason
