__title__ = 'fs-comparator'
__description__ = 'Compares two directory trees by path and by file contents.'
__version__ = '0.1.0'
__author__ = 'fs-comparator contributors'
__author_email__ = ''
__license__ = 'MIT'
__copyright__ = 'Copyright 2026 fs-comparator contributors'
