"""
Text Formatter - Turns serialized form text into the report layout
Convierte el texto serializado del formulario en el formato de informe
"""

import re
from typing import List

HEADER_MARKER = "#"
RULE_PREFIX = "----"

# Lines between the 2nd and 3rd separator are merged pairwise
TARGET_SECTION_START = 2
TARGET_SECTION_END = 3

_TERMINAL_PUNCTUATION = re.compile(r"[.!?,:]$")


def ensure_ends_with_dot(line: str) -> str:
    """
    Trim a line and append a period unless it already ends in . ! ? , or :
    Recortar una linea y anadir punto si no termina en . ! ? , o :
    """
    trimmed = line.strip()
    if not _TERMINAL_PUNCTUATION.search(trimmed):
        return trimmed + "."
    return trimmed


def format_line_group(lines: List[str]) -> str:
    """
    Join punctuated lines two at a time
    Unir lineas puntuadas de dos en dos

    Each pair becomes "first second" followed by a newline. A final
    unpaired line is joined with an empty string, so it keeps the space.
    """
    processed = [ensure_ends_with_dot(line) for line in lines if line.strip()]

    result = ""
    for i in range(0, len(processed), 2):
        first = processed[i]
        second = processed[i + 1] if i + 1 < len(processed) else ""
        result += first + " " + second + "\n"
    return result


class TextFormatter:
    """
    Single-pass line classifier with separator counting
    Clasificador de lineas de una pasada con conteo de separadores
    """

    def __init__(self):
        self.separator_count = 0
        self.in_target_section = False
        self.pending: List[str] = []
        self._fragments: List[str] = []

    def format(self, text: str) -> str:
        """
        Format raw serialized text
        Formatear texto serializado

        Args:
            text: Output of the text serializer

        Returns:
            Report text, trimmed
        """
        self.separator_count = 0
        self.in_target_section = False
        self.pending = []
        self._fragments = []

        for raw_line in text.split("\n"):
            line = raw_line.strip()
            if not line:
                continue

            if HEADER_MARKER in line:
                self._flush(trailing="\n")
                self._emit(line.replace(HEADER_MARKER, "").strip() + "\n")
                continue

            if line.startswith(RULE_PREFIX):
                self.separator_count += 1
                self._flush(trailing="\n")
                self.in_target_section = (
                    TARGET_SECTION_START <= self.separator_count < TARGET_SECTION_END
                )
                self._emit(line + "\n\n")
                continue

            if self.in_target_section:
                self.pending.append(ensure_ends_with_dot(line))
            else:
                self._emit(ensure_ends_with_dot(line) + "\n")

        self._flush(trailing="")
        return "".join(self._fragments).strip()

    def _emit(self, fragment: str) -> None:
        self._fragments.append(fragment)

    def _flush(self, trailing: str) -> None:
        if self.pending:
            self._emit(format_line_group(self.pending) + trailing)
            self.pending = []


def format_text(text: str) -> str:
    """Convenience wrapper / Funcion de conveniencia"""
    return TextFormatter().format(text)
