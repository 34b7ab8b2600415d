# Configuration file for the Sphinx documentation builder.
#
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Path setup --------------------------------------------------------------

import os
import sys
sys.path.insert(0, os.path.abspath('../'))

# -- Project information -----------------------------------------------------

project = 'AeroBulk'
copyright = '2023-2025, Stavroula Biri'
author = 'Stavroula Biri'

# The full version, including alpha/beta/rc tags
release = '1.0.0'


# -- General configuration ---------------------------------------------------

extensions = ['sphinx.ext.autodoc', 'sphinx.ext.mathjax',
              'sphinx.ext.viewcode', 'sphinx.ext.napoleon',
              'sphinx.ext.autosummary', 'sphinx_autodoc_typehints']

napoleon_numpy_docstring = True
autodoc_member_order = 'bysource'

exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

pygments_style = 'sphinx'

# -- Options for HTML output -------------------------------------------------

html_theme = 'sphinx_rtd_theme'
html_theme_options = {
    'style_nav_header_background': 'white',
    'logo_only': False,
    'collapse_navigation': False,
}

numfig = True
math_numfig = True
math_eqref_format = "Eq. {number}"
