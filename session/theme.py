"""Dark/light presentation toggle."""

EDITOR_THEMES = {"dark": "vs-dark", "light": "vs"}


class ThemeToggle:
    def __init__(self, mode="dark"):
        if mode not in EDITOR_THEMES:
            raise ValueError(f"Unknown theme mode: {mode}")
        self.mode = mode

    @property
    def editor_theme(self):
        return EDITOR_THEMES[self.mode]

    def toggle(self):
        self.mode = "light" if self.mode == "dark" else "dark"
        return self.mode
