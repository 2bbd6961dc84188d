from pathlib import Path
from jinja2 import Environment, FileSystemLoader

# A template line equal to this marker is emitted as a console section break.
SECTION_BREAK = "<<section>>"


class FarmRenderer:
    def __init__(self, template_dir: Path = None):
        # __file__ is .../agricap/farm/render.py -> parents[1] is the package root
        self.template_dir = Path(template_dir) if template_dir else \
            Path(__file__).resolve().parents[1] / "resources" / "text"
        self._env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render_template(self, template_name: str, **context) -> str:
        context['section_break'] = SECTION_BREAK
        tpl = self._env.get_template(template_name)
        return tpl.render(**context)

    def emit(self, console, template_name: str, **context):
        """Render a template and replay it line by line on the console."""
        text = self.render_template(template_name, **context)
        for line in text.splitlines():
            if line == SECTION_BREAK:
                console.section_break()
            elif line == "":
                console.new_line()
            else:
                console.print(line)
