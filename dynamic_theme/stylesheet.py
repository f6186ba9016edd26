"""Reference theme sink: renders the applied colors as tab and URL-bar CSS."""

import logging
import re

logger = logging.getLogger(__name__)

UNSAFE_CLASS_CHARS_RE = re.compile(r'[^A-Za-z0-9_-]')

TAB_RULES = """\
.tab-background-custom-color{suffix}[selected] {{
  background-color: {active} !important;
}}
.tab-background-custom-color{suffix}:not([selected]) {{
  background-color: {inactive} !important;
}}
.tab-background-custom-color{suffix}[selected] {{
  color: white !important;
}}
"""

URLBAR_RULE = """\
#urlbar-background {{
  background-color: {color} !important;
}}
"""


def hsla_css(hsla, alpha):
    return f"hsla({hsla.h}, {hsla.s}%, {hsla.l}%, {alpha})"


def class_suffix(target_id):
    return UNSAFE_CLASS_CHARS_RE.sub("-", str(target_id))


class StylesheetSink:
    """Keeps one rule block per target; re-applying a target replaces its block."""

    def __init__(self, config):
        self.config = config
        self.selected_target = None
        self.tab_rules = {}
        self.urlbar_rule = ""

    def apply(self, theme, target_id):
        self.tab_rules[target_id] = TAB_RULES.format(
            suffix=class_suffix(target_id),
            active=hsla_css(theme.hsla, self.config.contrast_active),
            inactive=hsla_css(theme.hsla, self.config.contrast_inactive),
        )
        if self.selected_target is None or target_id == self.selected_target:
            self.urlbar_rule = URLBAR_RULE.format(
                color=hsla_css(theme.hsla, self.config.contrast_search_bar)
            )
        logger.debug("Applied %s to %s", theme.hex, target_id)

    def css_text(self):
        blocks = list(self.tab_rules.values())
        if self.urlbar_rule:
            blocks.append(self.urlbar_rule)
        return "\n".join(blocks)

    def clear(self):
        self.tab_rules.clear()
        self.urlbar_rule = ""
