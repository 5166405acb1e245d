#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Stylesheets

CSS for the three render targets. Theme palettes are shared so that the
archive, the print book and the HTML book match the on-screen gallery.

Version: 1.0.0
"""

from typing import Dict

from inkverse.contracts import ThemeStyle


# Palette per theme: page background, ink colour, seal colour
THEME_PALETTES: Dict[ThemeStyle, Dict[str, str]] = {
    ThemeStyle.CLASSIC: {"background": "#fdfbf7", "ink": "#3a3a31", "seal": "#991b1b"},
    ThemeStyle.DARK: {"background": "#3a3a31", "ink": "#efefeb", "seal": "#f87171"},
    ThemeStyle.NATURE: {"background": "#e8ece6", "ink": "#3d4c3d", "seal": "#991b1b"},
}

FONT_STACK = '"Noto Serif SC", "Songti SC", "SimSun", serif'


def theme_css(selector_prefix: str = "") -> str:
    """One rule per theme: `.theme-<name> { background; color }`"""
    rules = []
    for theme, palette in THEME_PALETTES.items():
        rules.append(
            f"{selector_prefix}.theme-{theme.value} "
            f"{{ background-color: {palette['background']}; color: {palette['ink']}; }}"
        )
        rules.append(
            f"{selector_prefix}.theme-{theme.value} .seal "
            f"{{ border-color: {palette['seal']}; color: {palette['seal']}; }}"
        )
    return "\n".join(rules) + "\n"


# EPUB stylesheet: plain flow layout, no flexbox and no viewport units.
ARCHIVE_CSS = """@namespace epub "http://www.idpf.org/2007/ops";

body {
  margin: 0;
  padding: 10px;
  font-family: %(fonts)s;
  background-color: #fdfbf7;
  color: #3a3a31;
  line-height: 1.6;
}

/* Cover */
.cover-container { text-align: center; margin-top: 25%%; margin-bottom: 10%%; }
.cover-box { border: 4px double #333; padding: 2em; margin: 0 auto; display: inline-block; min-width: 220px; }
.cover-title { font-size: 2.5em; margin: 0; font-weight: bold; line-height: 1.4; }
.cover-subtitle { font-size: 1.2em; color: #555; margin-top: 1em; }
.cover-date { margin-top: 3em; font-size: 0.9em; color: #666; }

/* Poem page */
.poem-container { text-align: center; margin: 0 auto; }
.image-wrapper { text-align: center; margin-bottom: 1em; }
img.poem-image { max-width: 100%%; height: auto; max-height: 400px; margin: 0 auto; }
.poem-title { font-size: 1.6em; font-weight: bold; margin: 0.5em 0; line-height: 1.3; }
.poem-author { font-size: 0.9em; color: #7d7d6a; margin-bottom: 1.2em; font-style: italic; }
.poem-content {
  font-size: 1.1em;
  white-space: pre-wrap;
  margin: 0 auto;
  display: inline-block;
  text-align: left;
  max-width: 100%%;
}

/* Long works: horizontal, justified */
.flow-long_form .poem-content { display: block; text-align: justify; }

/* Short vertical works: right-to-left columns */
.flow-short_vertical .vertical-frame {
  writing-mode: vertical-rl;
  -epub-writing-mode: vertical-rl;
  -webkit-writing-mode: vertical-rl;
  display: inline-block;
  text-align: left;
  max-height: 80%%;
}
.flow-short_vertical .poem-title { margin: 0 0 0 1em; letter-spacing: 0.2em; }
.flow-short_vertical .poem-author { margin: 3em 0 0 1em; letter-spacing: 0.1em; }

a { color: inherit; text-decoration: none; }

/* Navigation */
nav#toc h1 { text-align: center; margin-bottom: 1em; }
nav#toc ol { list-style-type: none; padding: 0; text-align: center; }
nav#toc li { margin-bottom: 1em; border-bottom: 1px dashed #ccc; padding-bottom: 0.5em; }
""" % {"fonts": FONT_STACK} + theme_css()


# Print book. Every block carries .page-break; the browser print
# pipeline turns it into a new sheet.
PRINT_CSS = """@page { size: %(page_size)s; margin: 18mm; }

body { margin: 0; font-family: %(fonts)s; background: #ffffff; color: #1d1d18; }

.page-break { page-break-before: always; break-before: page; }
.print-footer {
  position: fixed; bottom: 0; left: 0; right: 0;
  text-align: center; font-size: 9pt; color: #9a9a88; letter-spacing: 0.2em;
}

/* Cover */
.cover { text-align: center; padding-top: 28%%; }
.cover-box { display: inline-block; border: 8px double #3a3a31; padding: 3em 4em; margin-bottom: 3em; }
.cover-title { font-size: 42pt; margin: 0 0 0.3em 0; }
.cover-subtitle { font-size: 14pt; letter-spacing: 0.5em; text-transform: uppercase; }
.cover-count { font-size: 13pt; color: #636353; }
.cover-date { font-size: 10pt; color: #636353; border-top: 1px solid #bdbdb0; padding-top: 1em; width: 12em; margin: 1em auto 0; }

/* Table of contents */
.toc { padding: 3em 2em; }
.toc h2 { font-size: 22pt; text-align: center; border-bottom: 1px solid #dcdcd5; padding-bottom: 0.5em; margin-bottom: 2em; }
.toc-entry { display: flex; justify-content: space-between; align-items: baseline; border-bottom: 1px dashed #dcdcd5; padding: 0.4em 0; }
.toc-index { font-family: monospace; color: #9a9a88; margin-right: 1em; }
.toc-author { color: #7d7d6a; white-space: nowrap; font-size: 10pt; }

/* Poem pages */
.poem { position: relative; padding: 2em 1.5em; border: 1px solid #dcdcd5; min-height: 80%%; }
.poem-image { text-align: center; margin: 0 0 2em 0; height: 192pt; }
.poem-image img { max-height: 100%%; max-width: 100%%; object-fit: contain; }
.poem-title { font-size: 24pt; font-weight: bold; line-height: 1.25; margin: 0; }
.poem-author { font-size: 12pt; opacity: 0.7; margin: 0; }
.poem-body { font-size: 16pt; line-height: 1.75; letter-spacing: 0.1em; white-space: pre-wrap; }
.seal { width: 3em; height: 3em; border: 2px solid; display: inline-flex; align-items: center; justify-content: center; transform: rotate(6deg); margin-top: 2em; }

/* Long works: constrained justified column */
.poem-long .poem-column { max-width: 32em; margin: 0 auto; }
.poem-long .poem-title, .poem-long .poem-author { text-align: center; margin-bottom: 0.8em; }
.poem-long .poem-body { text-align: justify; text-align-last: left; }

/* Short works in declared orientation */
.orientation-horizontal .poem-frame { text-align: center; }
.orientation-horizontal .poem-title { margin-bottom: 0.5em; }
.orientation-horizontal .poem-author { margin-bottom: 1.5em; }
.orientation-vertical .poem-frame {
  writing-mode: vertical-rl;
  text-align: left;
  height: 60vh;
  margin: 0 auto;
}
.orientation-vertical .poem-heading { padding-top: 0; margin-left: 3em; }
.orientation-vertical .poem-title { border-right: 4px solid currentColor; padding-right: 0.6em; letter-spacing: 0.2em; }
.orientation-vertical .poem-author { margin-top: 4em; letter-spacing: 0.3em; }
"""


def print_css(page_size: str = "A4") -> str:
    return PRINT_CSS % {"page_size": page_size, "fonts": FONT_STACK} + theme_css()


# Standalone HTML book for screens: one tall section per work with
# anchors, no page breaks.
SCREEN_CSS = """body { margin: 0; font-family: %(fonts)s; background-color: #fdfbf7; color: #1d1d18; scroll-behavior: smooth; }
a { color: inherit; }
.page-container {
  min-height: 100vh; display: flex; flex-direction: column; justify-content: center; align-items: center;
  padding: 4rem 1rem; border-bottom: 1px dashed #dcdcd5; box-sizing: border-box;
}
.cover-box { text-align: center; border: 8px double #1d1d18; padding: 4rem 6rem; background: rgba(255, 255, 255, 0.5); }
.cover-title { font-size: 4.5rem; margin: 0 0 1.5rem 0; }
.cover-subtitle { font-size: 1.5rem; letter-spacing: 0.5em; text-transform: uppercase; color: #636353; }
.cover-meta { margin-top: 4rem; text-align: center; color: #636353; }
.cover-link { margin-top: 3rem; padding: 0.5rem 1.5rem; border: 1px solid #9a9a88; border-radius: 999px; text-decoration: none; }
.toc-panel { width: 100%%; max-width: 48rem; background: rgba(255, 255, 255, 0.8); padding: 3rem; box-sizing: border-box; }
.toc-panel h2 { font-size: 2.25rem; text-align: center; border-bottom: 2px solid #434339; padding-bottom: 1rem; margin-bottom: 3rem; }
.toc-entry { display: flex; justify-content: space-between; align-items: baseline; padding: 1rem; border-bottom: 1px solid #dcdcd5; text-decoration: none; }
.toc-entry:hover { background: #f7f7f5; }
.toc-index { display: inline-block; width: 2rem; color: #bdbdb0; font-family: monospace; font-size: 0.875rem; }
.toc-author { color: #9a9a88; font-size: 0.875rem; }
.toc-hint { text-align: center; color: #9a9a88; font-size: 0.875rem; margin-top: 3rem; }
.poem-frame { padding: 3rem; }
.poem-image { max-height: 50vh; text-align: center; margin-bottom: 3rem; overflow: hidden; }
.poem-image img { max-height: 50vh; max-width: 100%%; object-fit: contain; }
.poem-title { font-size: 2.25rem; font-weight: bold; }
.poem-author { font-size: 1.125rem; opacity: 0.7; }
.poem-body { font-size: 1.125rem; line-height: 2; letter-spacing: 0.1em; white-space: pre-wrap; }
.orientation-horizontal .poem-frame { text-align: center; max-width: 42rem; }
.orientation-horizontal .poem-title { margin-bottom: 1.5rem; }
.orientation-horizontal .poem-author { margin-bottom: 2rem; }
.orientation-vertical .poem-frame { writing-mode: vertical-rl; text-align: left; height: 60vh; max-height: 800px; }
.orientation-vertical .poem-title { letter-spacing: 0.2em; margin-left: 3rem; }
.orientation-vertical .poem-author { margin-top: 4rem; margin-left: 1rem; letter-spacing: 0.1em; }
.poem-nav { margin-top: 3rem; font-size: 0.875rem; opacity: 0.5; }
.poem-nav:hover { opacity: 1; }
.site-footer { padding: 2rem 0; text-align: center; font-size: 0.75rem; color: #bdbdb0; background: #1d1d18; }
""" % {"fonts": FONT_STACK} + theme_css()
