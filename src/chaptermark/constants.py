#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/chaptermark/constants.py
"""Constants and default values shared across chaptermark.

Defaults for renderer options, the fixed markup fragments the renderer emits,
and the dependency specifications consumed by ``requires_dependencies``.
"""

from __future__ import annotations

# =============================================================================
# Renderer option defaults
# =============================================================================

DEFAULT_CHAPTER = 1
DEFAULT_SANITIZE = False
DEFAULT_XHTML = False
DEFAULT_BASEDIR = ""
DEFAULT_TAB_REPLACE = "\t"
DEFAULT_FAIL_ON_RESOURCE_ERRORS = False

# Images at or below this width (in pixels) receive the ``small`` class
DEFAULT_SMALL_IMAGE_MAX_WIDTH = 400

# =============================================================================
# Paragraph grouping
# =============================================================================

PARAGRAPH_GROUP_OPEN = '<div class="paragraphs">'
PARAGRAPH_GROUP_CLOSE = "</div>"

# =============================================================================
# Footnotes
# =============================================================================

FOOTNOTE_PREFIX = "footnote"
FOOTNOTE_REFERENCE_PREFIX = "footnote-reference"

# =============================================================================
# Figures and embeds
# =============================================================================

VIDEO_HOSTS = ("youtube.com", "youtu.be")
VIDEO_EMBED_URL = "https://www.youtube.com/embed/{video_id}"
VIDEO_ASPECT_RATIO = "56.25%"

CREDIT_MARKER = "credit:"

# =============================================================================
# Code listings
# =============================================================================

ASCII_ART_LANGUAGE = "ascii"
HIGHLIGHT_CLASS_PREFIX = "hljs-"

# =============================================================================
# URLs
# =============================================================================

# Checked against the entity-decoded, percent-decoded, punctuation-stripped href
DANGEROUS_SCHEMES = ("javascript:", "vbscript:", "data:")

# =============================================================================
# Dependency Specifications for @requires_dependencies decorator
# =============================================================================
# Each spec is a list of tuples: (pip_package, import_name, version_constraint)

DEPS_IMAGES = [("Pillow", "PIL", ">=9.0.0")]
