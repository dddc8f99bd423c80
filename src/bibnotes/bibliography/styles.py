"""Bibliography formatting styles.

`apa` is provided here as a pybtex style; every other name is looked up in pybtex's
`pybtex.style.formatting` plugin group (`plain`, `unsrt`, `alpha`, `unsrtalpha`, ...).
"""

from __future__ import annotations

from pybtex.plugin import PluginNotFound, find_plugin
from pybtex.style.formatting import BaseStyle, toplevel
from pybtex.style.formatting.unsrt import Style as UnsrtStyle
from pybtex.style.formatting.unsrt import dashify
from pybtex.style.template import field, first_of, join, names, optional, sentence, tag, words

from bibnotes.errors import ConfigError

pages = field("pages", apply_func=dashify)
year = first_of[optional[join["(", field("year"), ")"]], "(n.d.)"]
doi = optional[join["https://doi.org/", field("doi", raw=True)]]


class ApaStyle(UnsrtStyle):
    """Author-date entries in the spirit of APA 7.

    ``Smith, J., & Doe, A. (2020). Title in sentence case. *Journal*, *12*(3), 45–67.``
    Editors stand in for missing authors; with neither, the title moves to the front.
    Entry types without a template here fall back to the unsrt style.
    """

    default_name_style = "lastfirst"

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("abbreviate_names", True)
        super().__init__(**kwargs)

    def format_names(self, role, as_sentence=True):
        formatted_names = names(role, sep=", ", sep2=", & ", last_sep=", & ")
        if as_sentence:
            return sentence[formatted_names]
        return formatted_names

    def format_creators(self, e):
        if "author" in e.persons:
            return self.format_names("author")
        if "editor" in e.persons:
            role = "(Eds.)" if len(e.persons["editor"]) > 1 else "(Ed.)"
            return sentence[words[self.format_names("editor", as_sentence=False), role]]
        return None

    def format_head(self, e, title):
        """Creators, year and title in APA order."""

        creators = self.format_creators(e)
        if creators is None:
            return [title, sentence[year]]
        return [creators, sentence[year], title]

    def get_article_template(self, e):
        volume_and_number = optional[
            join[tag("em")[field("volume")], optional["(", field("number"), ")"]]
        ]
        template = toplevel[
            self.format_head(e, self.format_title(e, "title"))
            + [
                sentence[tag("em")[field("journal")], volume_and_number, optional[pages]],
                doi,
            ]
        ]
        return template

    def get_book_template(self, e):
        title = sentence[tag("em")[field("title", apply_func=lambda text: text.capitalize())]]
        template = toplevel[
            self.format_head(e, title)
            + [
                optional[sentence[field("publisher")]],
                doi,
            ]
        ]
        return template

    def get_inproceedings_template(self, e):
        template = toplevel[
            self.format_head(e, self.format_title(e, "title"))
            + [
                sentence[
                    words["In", tag("em")[field("booktitle")], optional[join["(pp. ", pages, ")"]]]
                ],
                optional[sentence[field("publisher")]],
                doi,
            ]
        ]
        return template

    def get_misc_template(self, e):
        template = toplevel[
            self.format_head(e, optional[self.format_title(e, "title")])
            + [
                optional[sentence[field("howpublished")]],
                optional[field("url", raw=True)],
                doi,
            ]
        ]
        return template


_BUILTIN_STYLES: dict[str, type[BaseStyle]] = {"apa": ApaStyle}


def get_style(name: str) -> BaseStyle:
    """Instantiate the formatting style called `name`.

    Raises:
        ConfigError: If no such style exists.
    """

    style_cls = _BUILTIN_STYLES.get(name.lower())
    if style_cls is None:
        try:
            style_cls = find_plugin("pybtex.style.formatting", name)
        except PluginNotFound as exc:
            raise ConfigError(f"unknown bibliography style {name!r}") from exc
    return style_cls()


def available_styles() -> list[str]:
    return sorted({*_BUILTIN_STYLES, "alpha", "plain", "unsrt", "unsrtalpha"})
