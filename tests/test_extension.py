from __future__ import annotations

import logging
from textwrap import dedent

from bs4 import BeautifulSoup
from markdown import Markdown
import pytest

from mdoffcanvas.core.assets import OFFCANVAS_DEPENDENCY
from mdoffcanvas.core.diagnostics import NullEmitter
from mdoffcanvas.core.exceptions import OffcanvasConfigError
from mdoffcanvas.extension import OffcanvasExtension


class RecordingEmitter(NullEmitter):
    def __init__(self) -> None:
        self.warnings: list[str] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)


def _markdown(**config: object) -> Markdown:
    emitter = config.pop("emitter", None) or NullEmitter()
    return Markdown(extensions=["toc", OffcanvasExtension(emitter=emitter, **config)])


def _render(source: str, **config: object) -> BeautifulSoup:
    md = _markdown(**config)
    return BeautifulSoup(md.convert(dedent(source)), "html.parser")


PANEL = """\
<div class="offcanvas" placement="end" markdown>
## Filters

Pick a category.

***

Footer note.
</div>
"""


def test_explicit_panel_renders_bootstrap_structure() -> None:
    soup = _render(PANEL)

    container = soup.find("div", id="oc-1")
    assert container is not None
    assert container["class"] == ["offcanvas", "offcanvas-end"]
    assert container["tabindex"] == "-1"
    assert container["aria-labelledby"] == "oc-1-label"
    assert container["style"] == "width:400px;"
    assert not container.has_attr("placement")
    assert not container.has_attr("data-bs-backdrop")

    title = container.find("h5", class_="offcanvas-title")
    assert title is not None
    assert title.get_text() == "Filters"
    assert title["id"] == "oc-1-label"
    assert container.find("button", class_="btn-close") is not None
    assert container.find("div", class_="offcanvas-body").get_text(strip=True) == (
        "Pick a category."
    )
    assert container.find("div", class_="offcanvas-footer").get_text(strip=True) == (
        "Footer note."
    )

    trigger = soup.find("button", attrs={"data-bs-toggle": "offcanvas"})
    assert trigger is not None
    assert trigger["data-bs-target"] == "#oc-1"
    assert trigger["aria-controls"] == "oc-1"
    assert trigger["class"] == ["btn", "btn-primary"]
    assert trigger.get_text() == "Open"


def test_identifiers_follow_document_order() -> None:
    soup = _render(
        """\
        <div class="offcanvas" markdown>
        First.
        </div>

        <div class="offcanvas" markdown>
        Second.
        </div>
        """
    )
    ids = [node["id"] for node in soup.find_all("div", class_="offcanvas")]
    assert ids == ["oc-1", "oc-2"]


def test_author_identifier_and_vertical_placement() -> None:
    soup = _render(
        """\
        <div class="offcanvas" id="menu" placement="bottom" backdrop="static" markdown>
        Menu content.
        </div>
        """
    )
    container = soup.find("div", id="menu")
    assert container["class"] == ["offcanvas", "offcanvas-bottom"]
    assert container["style"] == "height:30vh;"
    assert container["data-bs-backdrop"] == "static"
    assert soup.find("button", attrs={"data-bs-target": "#menu"}) is not None


def test_ids_restart_after_reset() -> None:
    md = _markdown()
    source = dedent(PANEL)
    first = BeautifulSoup(md.convert(source), "html.parser")
    md.reset()
    second = BeautifulSoup(md.convert(source), "html.parser")
    assert first.find("div", class_="offcanvas")["id"] == "oc-1"
    assert second.find("div", class_="offcanvas")["id"] == "oc-1"


def test_front_matter_does_not_carry_into_next_document() -> None:
    md = _markdown()
    first = md.convert(
        dedent(
            """\
            ---
            extensions:
              offcanvas:
                placement: end
                overtake-margins: true
            ---

            <div class="offcanvas" markdown>
            Body.
            </div>
            """
        )
    )
    second = md.convert(
        dedent(
            """\
            <div class="offcanvas" markdown>
            Body.
            </div>

            <div class="column-margin" markdown>
            Note.
            </div>
            """
        )
    )

    first_panel = BeautifulSoup(first, "html.parser").find("div", class_="offcanvas")
    assert first_panel["class"] == ["offcanvas", "offcanvas-end"]

    soup = BeautifulSoup(second, "html.parser")
    panels = soup.find_all("div", class_="offcanvas")
    assert len(panels) == 1
    assert panels[0]["class"] == ["offcanvas", "offcanvas-start"]
    assert panels[0]["id"] == "oc-1"
    assert soup.find("div", class_="column-margin").get_text(strip=True) == "Note."
    assert md.offcanvas_metadata["extensions"]["offcanvas"]["placement"] == "start"


def test_panel_headings_are_hidden_from_toc() -> None:
    md = _markdown()
    html = md.convert(
        dedent(
            """\
            # Document

            <div class="offcanvas" markdown>
            ## Panel title

            ### Panel section

            Body.
            </div>

            ## After
            """
        )
    )

    def names(tokens: list[dict]) -> list[str]:
        collected: list[str] = []
        for token in tokens:
            collected.append(token["name"])
            collected.extend(names(token["children"]))
        return collected

    assert names(md.toc_tokens) == ["Document", "After"]

    soup = BeautifulSoup(html, "html.parser")
    section = soup.find("h3")
    assert section is not None
    assert section.get_text() == "Panel section"
    assert section["id"] == "oc-1-panel-section"
    assert "unlisted" in section["class"]
    assert not section.has_attr("data-offcanvas-level")
    assert soup.find("offcanvas-heading") is None


@pytest.mark.parametrize(
    "config",
    [
        {"target": "latex"},
        {"scripting": False},
        {"bootstrap": False},
    ],
)
def test_gate_leaves_output_untouched(config: dict[str, object]) -> None:
    source = dedent(PANEL)
    plain = Markdown(extensions=["toc", "md_in_html", "attr_list"]).convert(source)
    md = _markdown(**config)
    assert md.convert(source) == plain
    assert md.offcanvas_dependencies == []


def test_dependency_registered_once_when_enabled() -> None:
    md = _markdown()
    assert md.offcanvas_dependencies == [OFFCANVAS_DEPENDENCY]
    md.convert(dedent(PANEL))
    md.convert(dedent(PANEL))
    assert md.offcanvas_dependencies == [OFFCANVAS_DEPENDENCY]


def test_front_matter_sets_document_defaults() -> None:
    md = _markdown()
    html = md.convert(
        dedent(
            """\
            ---
            title: Demo
            extensions:
              offcanvas:
                placement: top
                trigger-text: Browse
                scroll: true
            ---

            <div class="offcanvas" markdown>
            Body.
            </div>
            """
        )
    )
    soup = BeautifulSoup(html, "html.parser")
    container = soup.find("div", id="oc-1")
    assert container["class"] == ["offcanvas", "offcanvas-top"]
    assert container["data-bs-scroll"] == "true"
    assert soup.find("button", attrs={"data-bs-target": "#oc-1"}).get_text() == "Browse"
    assert "title: Demo" not in html

    section = md.offcanvas_metadata["extensions"]["offcanvas"]
    assert md.offcanvas_metadata["title"] == "Demo"
    assert section["placement"] == "top"
    assert section["scroll"] == "true"
    assert section["width"] == "400px"


def test_extension_options_sit_below_front_matter() -> None:
    source = """\
    ---
    extensions:
      offcanvas:
        width: 250px
    ---

    <div class="offcanvas" markdown>
    Body.
    </div>
    """
    soup = _render(source, options={"placement": "end", "width": "500px"})
    container = soup.find("div", id="oc-1")
    assert container["class"] == ["offcanvas", "offcanvas-end"]
    assert container["style"] == "width:250px;"


def test_metadata_config_feeds_front_matter_free_hosts() -> None:
    soup = _render(
        PANEL,
        front_matter=False,
        metadata={"extensions": {"offcanvas": {"show-close": False}}},
    )
    assert soup.find("button", class_="btn-close") is None


def test_invalid_metadata_aborts_conversion() -> None:
    md = _markdown()
    with pytest.raises(OffcanvasConfigError):
        md.convert("---\nextensions:\n  offcanvas:\n    scroll: maybe\n---\n\ntext\n")


def test_invalid_options_fail_at_registration() -> None:
    with pytest.raises(OffcanvasConfigError):
        Markdown(extensions=[OffcanvasExtension(options={"keyboard": ["no"]})])


def test_warnings_reach_emitter() -> None:
    emitter = RecordingEmitter()
    _render(
        """\
        ---
        extensions:
          offcanvas:
            colour: red
        ---

        <div class="offcanvas" placement="diagonal" markdown>
        Body.
        </div>
        """,
        emitter=emitter,
    )
    assert emitter.warnings == [
        '[offcanvas] Unknown option "colour" in extensions.offcanvas. Ignoring.',
        '[offcanvas] Invalid placement "diagonal". Using "start".',
    ]


def test_default_emitter_logs_warnings(caplog: pytest.LogCaptureFixture) -> None:
    md = Markdown(extensions=[OffcanvasExtension()])
    with caplog.at_level(logging.WARNING, logger="mdoffcanvas"):
        md.convert(
            dedent(
                """\
                <div class="offcanvas" responsive="giant" markdown>
                Body.
                </div>
                """
            )
        )
    assert any(
        record.getMessage() == '[offcanvas] Invalid responsive breakpoint "giant". Ignoring.'
        for record in caplog.records
    )


def test_title_attribute_is_escaped() -> None:
    md = _markdown()
    html = md.convert(
        dedent(
            """\
            <div class="offcanvas" title='Fish & "Chips"' markdown>
            Body.
            </div>
            """
        )
    )
    assert '<h5 class="offcanvas-title" id="oc-1-label">Fish &amp; &quot;Chips&quot;</h5>' in html


def test_trigger_suppressed_leaves_bare_container() -> None:
    soup = _render(
        """\
        <div class="offcanvas" trigger-position="none" markdown>
        Body.
        </div>
        """
    )
    assert soup.find("div", id="oc-1") is not None
    assert soup.find(attrs={"data-bs-toggle": "offcanvas"}) is None


OVERTAKE = """\
---
extensions:
  offcanvas:
    overtake-margins: true
---

"""


def test_margin_block_is_overtaken() -> None:
    soup = _render(
        OVERTAKE
        + dedent(
            """\
            <div class="column-margin" markdown>
            This is a fairly long margin note that goes on and on.
            </div>
            """
        )
    )
    wrapper = soup.find("div", class_="column-margin")
    assert wrapper is not None
    trigger = wrapper.find("button")
    assert trigger.get_text() == "This is a fairly long margi..."
    container = soup.find("div", id="oc-1")
    assert container.find("h5").get_text() == "Margin Content"
    assert "goes on and on" in container.find("div", class_="offcanvas-body").get_text()


def test_margin_label_skips_nested_panel_markup() -> None:
    soup = _render(
        OVERTAKE
        + dedent(
            """\
            <div class="column-margin" markdown>
            <div class="offcanvas" markdown>
            ## Inner

            inner body
            </div>
            </div>
            """
        )
    )
    wrapper = soup.find("div", class_="column-margin")
    assert wrapper.find("button").get_text() == "inner body"


def test_margin_blocks_untouched_without_overtake() -> None:
    soup = _render(
        """\
        <div class="column-margin" markdown>
        Note.
        </div>
        """
    )
    assert soup.find("div", class_="offcanvas") is None
    assert soup.find("div", class_="column-margin").get_text(strip=True) == "Note."


def test_inline_margin_note_is_hoisted_after_paragraph() -> None:
    soup = _render(OVERTAKE + "A sentence with [a short note]{.aside} inside.\n")

    paragraph = soup.find("p")
    wrapper = paragraph.find("span", class_="aside")
    assert wrapper is not None
    assert wrapper.find("button").get_text() == "a short note"
    assert paragraph.find("div") is None
    assert "inside." in paragraph.get_text()

    container = paragraph.find_next_sibling("div")
    assert container["id"] == "oc-1"
    assert container.find("div", class_="offcanvas-body").get_text(strip=True) == "a short note"


def test_bracketed_span_without_overtake_stays_a_span() -> None:
    soup = _render("See [this]{.aside #note data-x=1} here.\n")
    span = soup.find("span", id="note")
    assert span["class"] == ["aside"]
    assert span["data-x"] == "1"
    assert span.get_text() == "this"
