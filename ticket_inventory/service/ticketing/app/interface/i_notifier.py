from abc import ABC, abstractmethod


class INotifier(ABC):
    """Transient user-facing notifications (toasts)."""

    @abstractmethod
    def success(self, message: str) -> None:
        pass

    @abstractmethod
    def info(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        pass
