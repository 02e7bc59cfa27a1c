"""Theme definitions for the window.

This module hides the design decisions about:
- Color palette and visual appearance
- Theme variables (borders, scrollbars, cursor)

To add a new theme, define it here and register it in the app.
"""

from textual.theme import Theme

# Catppuccin Mocha palette; the answer pane reads best on a deep background
DEALER_DARK = Theme(
    name="dealer-dark",
    primary="#89b4fa",      # Blue - question border, focus
    secondary="#cba6f7",    # Mauve - heading
    accent="#f9e2af",       # Yellow - status line
    foreground="#cdd6f4",
    background="#11111b",
    success="#a6e3a1",      # Green - Send button
    warning="#fab387",      # Peach - log panel
    error="#f38ba8",        # Red - Quit button
    surface="#1e1e2e",
    panel="#181825",
    dark=True,
    variables={
        "block-cursor-foreground": "#11111b",
        "block-cursor-background": "#f5e0dc",
        "input-selection-background": "#89b4fa 30%",
        "border": "#45475a",
        "border-blurred": "#313244",
        "scrollbar": "#313244",
        "scrollbar-hover": "#45475a",
        "scrollbar-active": "#89b4fa",
        "scrollbar-background": "#181825",
        "footer-key-foreground": "#f9e2af",
        "text-muted": "#6c7086",
    },
)
