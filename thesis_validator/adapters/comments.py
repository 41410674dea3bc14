"""
Review-comment sink.

Rules push one comment per finding; the sink decides how it is anchored:
on a run, on a paragraph (its first run, or a bare range when it has none),
or on the run covering a character offset. Insertion is serialized with a
lock so comment ids stay unique when rules run on worker threads.
"""
from __future__ import annotations
from typing import Optional
import logging
import threading

from docx.document import Document as DocxDocument
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.text.paragraph import Paragraph
from docx.text.run import Run

from thesis_validator.adapters.docx_adapter import content_runs, run_text

logger = logging.getLogger(__name__)

DEFAULT_AUTHOR = "Thesis Validator"


def author_initials(author: str) -> str:
    return "".join(word[0].upper() for word in author.split() if word)


class DocumentCommentSink:
    def __init__(self, document: DocxDocument, author: str = DEFAULT_AUTHOR):
        self.document = document
        self.author = author
        self.initials = author_initials(author)
        self.count = 0
        self._lock = threading.Lock()

    def add_comment_to_run(self, run: Run, text: str) -> None:
        with self._lock:
            self.document.add_comment(run, text=text, author=self.author, initials=self.initials)
            self.count += 1

    def add_comment_to_paragraph(self, paragraph: Paragraph, text: str) -> None:
        runs = content_runs(paragraph)
        if runs:
            self.add_comment_to_run(runs[0], text)
            return
        with self._lock:
            self._add_bare_range(paragraph, text)
            self.count += 1

    def add_comment_at_offset(self, paragraph: Paragraph, offset: int, length: int, text: str) -> None:
        run = self._run_at(paragraph, offset, length)
        if run is not None:
            self.add_comment_to_run(run, text)
        else:
            self.add_comment_to_paragraph(paragraph, text)

    @staticmethod
    def _run_at(paragraph: Paragraph, offset: int, length: int) -> Optional[Run]:
        runs = content_runs(paragraph)
        position = 0
        end = offset + max(length, 1)
        for run in runs:
            run_len = len(run_text(run))
            if run_len and position < end and offset < position + run_len:
                return run
            position += run_len
        return runs[0] if runs else None

    def _add_bare_range(self, paragraph: Paragraph, text: str) -> None:
        comment = self.document.comments.add_comment(text=text, author=self.author, initials=self.initials)
        comment_id = str(comment.comment_id)
        p = paragraph._element

        start = OxmlElement("w:commentRangeStart")
        start.set(qn("w:id"), comment_id)
        end = OxmlElement("w:commentRangeEnd")
        end.set(qn("w:id"), comment_id)
        ref_run = OxmlElement("w:r")
        ref_rpr = OxmlElement("w:rPr")
        ref_style = OxmlElement("w:rStyle")
        ref_style.set(qn("w:val"), "CommentReference")
        ref_rpr.append(ref_style)
        ref_run.append(ref_rpr)
        ref = OxmlElement("w:commentReference")
        ref.set(qn("w:id"), comment_id)
        ref_run.append(ref)

        ppr = p.find(qn("w:pPr"))
        position = list(p).index(ppr) + 1 if ppr is not None else 0
        p.insert(position, start)
        p.append(end)
        p.append(ref_run)
        logger.debug(f"Bare comment range {comment_id} on empty paragraph")
