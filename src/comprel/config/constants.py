"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
For configurable values, see models.py (ResolverConfig, DatabaseConfig, etc.).
"""

# =============================================================================
# Base Library Setup
# =============================================================================

BASE_INSTALL_NOTES = (
    "Install ECL: npm install @ecl/preset-eu or use CDN",
    'Include ECL CSS: <link rel="stylesheet" href="ecl-eu.css">',
)
"""Setup lines that open every installation-note list."""

BASE_SCRIPT_NOTE = 'Include ECL JavaScript: <script src="ecl-eu.js"></script>'
"""Script include for components that need scripting but ship no script tag."""

SCANNED_SCRIPT_INIT_HINT = "Initialize component with: ECL.autoInit() or new ECL.ComponentName(element)"
BASE_SCRIPT_INIT_HINT = "Initialize with: ECL.autoInit()"

# =============================================================================
# Sample Languages
# =============================================================================

MARKUP_LANGUAGES = frozenset({"html", "xhtml", "markup"})
"""Sample languages scanned for stylesheet/script references."""

SCRIPT_LANGUAGES = frozenset({"javascript", "js"})
"""Sample languages that signal a component needs scripting."""

# =============================================================================
# Result Defaults
# =============================================================================

DEFAULT_COMPLEXITY = "moderate"

FRAMEWORK_SPECIFIC_LABEL = "Specific framework required"
FRAMEWORK_AGNOSTIC_LABEL = "Vanilla JS compatible"

# Conflict analysis: combinations above these counts get a system warning
COMPLEX_COMPONENT_THRESHOLD = 3
SCRIPTED_COMPONENT_THRESHOLD = 5
