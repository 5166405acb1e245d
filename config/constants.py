"""
Centralized constants for Ink & Verse publishing.
Fixed format values and presentation defaults.
"""

# ===========================================
# LAYOUT CLASSIFICATION
# ===========================================
LONG_POEM_MAX_CHARS = 140             # more than this forces horizontal flow
LONG_POEM_MAX_LINES = 14              # more lines than this forces horizontal flow

# ===========================================
# BOOK DEFAULTS
# ===========================================
DEFAULT_BOOK_TITLE = '墨韵诗集'
DEFAULT_BOOK_SUBTITLE = 'Ink & Verse'
DEFAULT_BOOK_CREATOR = 'Ink & Verse'  # dc:creator of the package
DEFAULT_LANGUAGE = 'zh-CN'
UNTITLED_PLACEHOLDER = 'Untitled'
ANONYMOUS_PLACEHOLDER = 'Anonymous'
COVER_LABEL = '封面'
CONTENTS_LABEL = '目录'
COUNT_TEMPLATE = '收录诗歌 {count} 首'

# ===========================================
# EPUB CONTAINER
# ===========================================
EPUB_MIMETYPE = 'application/epub+zip'
MIMETYPE_PATH = 'mimetype'
CONTAINER_PATH = 'META-INF/container.xml'
CONTENT_DIR = 'OEBPS'
PACKAGE_DOCUMENT = 'content.opf'
NAV_DOCUMENT = 'toc.xhtml'
NCX_DOCUMENT = 'toc.ncx'
COVER_DOCUMENT = 'cover.xhtml'
STYLESHEET = 'styles.css'
IMAGES_DIR = 'images'

MEDIA_TYPE_XHTML = 'application/xhtml+xml'
MEDIA_TYPE_CSS = 'text/css'
MEDIA_TYPE_NCX = 'application/x-dtbncx+xml'
MEDIA_TYPE_OPF = 'application/oebps-package+xml'

# EPUB 3 core media types for images, keyed by declared data URI subtype
IMAGE_MEDIA_TYPES = {
    'jpeg': 'image/jpeg',
    'jpg': 'image/jpeg',
    'png': 'image/png',
    'gif': 'image/gif',
    'webp': 'image/webp',
    'svg+xml': 'image/svg+xml',
}
IMAGE_EXTENSIONS = {
    'svg+xml': 'svg',
}
MAX_ASSET_SIZE_MB = 10                # decoded bytes per embedded image

# ===========================================
# PRINT
# ===========================================
PAGE_SIZES = {                        # points (width, height)
    'letter': (612, 792),
    'A4': (595, 842),
    'A5': (420, 595),
    'B5': (516, 729),
}
PRINT_MARGIN_PT = 54
PRINT_LINE_HEIGHT_PT = 28             # body 16pt at leading-loose
PRINT_IMAGE_HEIGHT_PT = 192

# ===========================================
# FILE HANDLING
# ===========================================
OUTPUT_DIR = 'data/output'

# ===========================================
# LOGGING
# ===========================================
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE = 'logs/inkverse.log'
LOG_MAX_SIZE_MB = 10
LOG_BACKUP_COUNT = 5
