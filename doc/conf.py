import sys
import os.path
import sphinx_rtd_theme

sys.path.insert(0, os.path.abspath('..'))

import sheds

extensions = [
    'sphinx.ext.autodoc', 'sphinx.ext.doctest',
    'sphinx.ext.viewcode', 'sphinx.ext.mathjax'
]
project = 'sheds'
source_suffix = '.rst'
master_doc = 'index'

version = release = sheds.__version__
copyright = 'Sheds Team'

epub_basename = 'sheds - {}'.format(version)
epub_author = 'Sheds Team'

html_theme = 'sphinx_rtd_theme'
