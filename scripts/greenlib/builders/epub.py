"""
EPUB builder.

Pipeline: cover → inline TOC → one XHTML document per paste → ebooklib
writes the container.
"""

import uuid

from ebooklib import epub

from greenlib.builders.base import BaseBuilder, BuildError
from greenlib.content import (
    COVER_STYLESHEET,
    STYLESHEET,
    cover_stylesheet_content,
    coverpage_content,
    stylesheet_content,
)
from greenlib.cover import CoverError, load_cover
from greenlib.resolve import paste_title

XHTML_MEDIA_TYPE = "application/xhtml+xml"
CSS_MEDIA_TYPE = "text/css"

# The cover page is a raw XHTML item; page-list discovery only handles EpubHtml.
WRITE_OPTIONS = {"epub3_pages": False}


def paste_file_name(count):
    return f"content/paste-{count:03}.xhtml"


class PasteHtml(epub.EpubHtml):
    """
    A paste document written exactly as it was serialized.

    EpubHtml rebuilds its content through an HTML parser and pretty-prints
    it, which puts whitespace between adjacent spans.
    """

    def get_content(self, default=None):
        return self.content


class EpubBuilder(BaseBuilder):
    format_name = "EPUB"
    extension = ".epub"

    def build(self):
        self.header()

        try:
            book = self.create_book()
            spine = self.add_cover(book)

            # NOTE: Keep the TOC after the cover page.
            spine.append("nav")

            chapters = self.add_pastes(book)
            spine.extend(chapters)
        except (BuildError, CoverError) as e:
            self.reporter.failure(str(e))
            return False

        book.toc = chapters
        book.spine = spine
        book.add_item(epub.EpubNcx())
        book.add_item(epub.EpubNav())

        self.log("Creating output file")
        try:
            epub.write_epub(self.output_file, book, WRITE_OPTIONS)
        except OSError as e:
            self.reporter.failure(
                f"failed to generate EPUB: {e}\nContext: {self.output_file!r}"
            )
            return False

        self.reporter.success(f"Successfully generated {self.output_file}")
        return True

    # ── Steps ──────────────────────────────────────────────

    def create_book(self):
        config = self.config
        self.log(f"Metadata: title={config.title!r} author={config.author!r}")

        book = epub.EpubBook()
        book.set_identifier(f"urn:uuid:{uuid.uuid4()}")
        book.set_title(config.title)
        book.set_language(config.lang)
        book.add_author(config.author)
        for subject in config.subjects:
            book.add_metadata("DC", "subject", subject)

        book.add_item(
            epub.EpubItem(
                uid="style_default",
                file_name=STYLESHEET,
                media_type=CSS_MEDIA_TYPE,
                content=stylesheet_content(config.green_color, config.spoiler_color),
            )
        )
        return book

    def add_cover(self, book):
        """Add cover image, stylesheet and page. Returns the spine so far."""
        path = self.config.cover
        if not path:
            return []

        self.reporter.info(f"Setting cover to {path!r}")
        cover = load_cover(path)
        self.log(f"Cover image format: {cover.extension!r}")
        self.log(f"Cover image size: {cover.size}")

        image = epub.EpubCover(file_name=cover.href)
        image.media_type = cover.media_type
        image.content = cover.data
        book.add_item(image)
        book.add_metadata(None, "meta", "", {"name": "cover", "content": image.get_id()})

        book.add_item(
            epub.EpubItem(
                uid="style_cover",
                file_name=COVER_STYLESHEET,
                media_type=CSS_MEDIA_TYPE,
                content=cover_stylesheet_content(),
            )
        )

        page = epub.EpubItem(
            uid="coverpage",
            file_name="content/cover.xhtml",
            media_type=XHTML_MEDIA_TYPE,
            content=coverpage_content(cover.href, cover.size, lang=self.config.lang).encode("utf-8"),
        )
        page.properties = ["svg"]
        book.add_item(page)
        book.guide.append({"type": "cover", "href": page.file_name, "title": "Cover"})
        return [page]

    def add_pastes(self, book):
        chapters = []
        for count, path in enumerate(self.input_files, 1):
            title = paste_title(path)
            paste = self.load_paste(path, title)

            self.log(f"Adding parsed content of {path!r} to EPUB with title {title!r}")
            chapter = PasteHtml(
                uid=f"paste-{count:03}",
                title=title,
                file_name=paste_file_name(count),
                lang=self.config.lang,
            )
            chapter.content = paste.build().encode("utf-8")
            book.add_item(chapter)
            chapters.append(chapter)
        return chapters
