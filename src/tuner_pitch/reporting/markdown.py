from typing import Iterable, Sequence


class MarkdownDoc:
    """
    Line buffer for the pitch report. Each block method appends its own
    trailing blank line so sections can be stacked in any order.
    """

    def __init__(self) -> None:
        self._lines: list[str] = []

    def add(self, line: str = "") -> None:
        self._lines.append(line)

    def heading(self, level: int, title: str) -> None:
        self.add(f"{'#' * max(1, int(level))} {title}")
        self.add()

    def h1(self, title: str) -> None:
        self.heading(1, title)

    def h2(self, title: str) -> None:
        self.heading(2, title)

    def p(self, text: str) -> None:
        self.add(text)
        self.add()

    def bullet(self, items: Iterable[str]) -> None:
        for it in items:
            self.add(f"- {it}")
        self.add()

    def image(self, rel_path: str, alt: str = "") -> None:
        self.add(f"![{alt}]({rel_path})")
        self.add()

    def table(self, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        self.add("| " + " | ".join(headers) + " |")
        self.add("| " + " | ".join(["---"] * len(headers)) + " |")
        for r in rows:
            self.add("| " + " | ".join(r) + " |")
        self.add()

    def to_markdown(self) -> str:
        return "\n".join(self._lines).rstrip() + "\n"
