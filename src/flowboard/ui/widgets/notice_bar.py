"""Notice bar widget."""

from textual.widgets import Static


class NoticeBar(Static):
    """One-line status message, hidden when there is nothing to say."""

    def show_notice(self, notice: str | None) -> None:
        self.update(notice or "")
        self.display = bool(notice)
