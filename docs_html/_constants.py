"""Common literal values used across docs_html.

These constants keep output filenames and directory names centralized so the
version renderer, asset writer, templates, and tests can import the same
values without drifting. Intended for internal use within the docs_html
package.

Examples
--------
>>> from docs_html import _constants
>>> _constants.CATEGORY_PAGE_TEMPLATE.format(id="guides")
'categories/guides/index.html'
>>> _constants.NAV_STORAGE_KEY_TEMPLATE.format(version="1.0")
'docs-html-nav-1.0'
"""

DEFAULT_CONFIG_PATH = "config/docs.yaml"
DEFAULT_OUT_DIR = "dist/html"
STATIC_STYLES_DIR = "static-styles"
INLINE_SITE_SUBDIR = "static"

INDEX_PAGE = "index.html"
CATEGORY_PAGE_TEMPLATE = "categories/{id}/index.html"
DOCUMENT_PAGE_TEMPLATE = "docs/{id}/index.html"
STATIC_MANIFEST = "static-manifest.json"
ASSETS_MANIFEST = "assets-manifest.json"

STYLESHEET_TARGET = "site.css"
HIGHLIGHT_THEME_TARGET = "prism-tomorrow.css"
CODE_TABS_TARGET = "static-code-block.css"
CAROUSEL_STYLE_TARGET = "static-carousel.css"
COMPARE_STYLE_TARGET = "static-compare.css"
EXTRA_STYLESHEETS = (
    HIGHLIGHT_THEME_TARGET,
    CODE_TABS_TARGET,
    CAROUSEL_STYLE_TARGET,
    COMPARE_STYLE_TARGET,
)

NAV_STORAGE_KEY_TEMPLATE = "docs-html-nav-{version}"
SEPARATE_BUILD_ENV_KEYS = (
    "SEPARATE_BUILD_FOR_HTML_GENERATOR",
    "separateBuildForHtmlGenerator",
)
