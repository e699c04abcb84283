"""Common literal values used across sitepress.

These constants keep filenames and metadata keys centralized so templates,
builders, and tests can import the same values without drifting. Intended for
internal use within the sitepress package.

Examples
--------
>>> from sitepress import _constants
>>> _constants.CONTENT_TEMPLATE_DIR
'[path]'
>>> _constants.DEFAULT_DESCRIPTION_TEMPLATE.format(slug="hello")
'Hi, This is hello...'
"""

CONTENT_TEMPLATE_DIR = "[path]"
CONTENT_TEMPLATE_STEM = "index"
DEFAULT_TEMPLATE_EXTENSION = ".jinja"
CONTENT_EXTENSIONS = (".md", ".markdown")
INDEX_PAGE = "index"
ASSETS_DIR = "assets"
CODE_STYLESHEET = "codehilite.css"

META_JSON = "meta.json"
META_PY = "meta.py"
META_PY_ATTRIBUTE = "meta"
CREATED_AT_KEY = "$createdAt"
MODIFIED_AT_KEY = "$modifiedAt"
DEFAULT_DESCRIPTION_TEMPLATE = "Hi, This is {slug}..."

PARENT_MARKER = ".."
URL_SEP = "/"
