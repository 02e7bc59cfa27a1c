"""CSS styles for the window.

Hides layout and styling decisions from the application logic.
Layout, top to bottom: heading, question, action row, answer, log panel.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

#main {
    height: 1fr;
    padding: 0 1;
}

#heading {
    height: 1;
    margin: 1 0 0 0;
    color: $secondary;
    text-style: bold;
}

.field-label {
    height: 1;
    margin: 1 0 0 0;
    color: $text-muted;
}

/* Question entry */
#question {
    height: 6;
    border: round $primary 60%;
    background: $surface;

    &:focus {
        border: round $primary;
    }
}

/* Send / Quit row */
#actions {
    height: 3;
    margin: 1 0 0 0;
}

#actions Button {
    min-width: 12;
    margin: 0 1 0 0;
}

#send-btn {
    background: $success;
    color: $background;
    text-style: bold;
}

#quit-btn {
    background: $error 80%;
    color: $background;
}

#status {
    width: 1fr;
    height: 3;
    content-align: left middle;
    color: $accent;
}

/* Answer: fills the rest of the window */
#answer {
    height: 1fr;
    min-height: 5;
    border: round $border;
    border-title-color: $text-muted;
    background: $panel;
}

#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;
}
"""
