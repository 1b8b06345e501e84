from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.app.interface.i_notifier import INotifier


class LoguruNotifier(INotifier):
    """Headless notifier: user-facing toasts become log lines tagged [NOTIFY]."""

    def success(self, message: str) -> None:
        Logger.base.success(f'✅ [NOTIFY] {message}')

    def info(self, message: str) -> None:
        Logger.base.info(f'ℹ️ [NOTIFY] {message}')

    def error(self, message: str) -> None:
        Logger.base.error(f'❌ [NOTIFY] {message}')
