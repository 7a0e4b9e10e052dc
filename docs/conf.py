# Sphinx configuration for the quantlex documentation.
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import os
import sys

sys.path.insert(0, os.path.abspath('../src'))

# -- Project information -----------------------------------------------------

project = 'quantlex'
author = 'quantlex contributors'
copyright = '2025, quantlex contributors'
html_title = 'quantlex'

# -- General configuration ---------------------------------------------------

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx_copybutton',
    'myst_parser',
]

root_doc = 'index'
exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

source_suffix = {
    '.rst': 'restructuredtext',
    '.md': 'markdown',
}

myst_enable_extensions = ['colon_fence']

# Quantity types and parsers are documented in source order, grouped by module
autodoc_member_order = 'bysource'
autodoc_typehints = 'description'
napoleon_numpy_docstring = True

# Strip ">>> " prompts when copying examples
copybutton_prompt_text = r'>>> |\.\.\. '
copybutton_prompt_is_regexp = True

# -- Options for HTML output -------------------------------------------------

html_theme = 'furo'

html_theme_options = {
    'sidebar_hide_name': False,
    'navigation_with_keys': True,
    'light_css_variables': {
        'color-brand-primary': '#2980b9',
        'color-brand-content': '#1f4e79',
    },
    'dark_css_variables': {
        'color-brand-primary': '#9b59b6',
        'color-brand-content': '#bfb3ff',
    },
}
