"""Kida-backed template rendering.

``Response.render`` calls a renderer with a template path and a data
dict. ``kida_renderer`` builds one on a kida Environment rooted at the
template directory::

    app = App(config, renderer=kida_renderer(config.template_dir))

Requires the ``templates`` extra: ``pip install tern[templates]``.
"""

from pathlib import Path
from typing import Any

from tern._internal.types import Renderer
from tern.errors import ConfigurationError


def kida_renderer(
    template_dir: str | Path = "templates",
    *,
    autoescape: bool = True,
    auto_reload: bool = False,
) -> Renderer:
    """Create a renderer that loads templates from *template_dir*.

    The environment is created once; each call resolves the path given by
    ``Response.render`` back to a template name under the root.
    """
    try:
        from kida import Environment, FileSystemLoader
    except ImportError:
        msg = "Template rendering requires 'kida'. Install it with: pip install tern[templates]"
        raise ConfigurationError(msg) from None

    root = Path(template_dir)
    env = Environment(
        loader=FileSystemLoader(str(root)),
        autoescape=autoescape,
        auto_reload=auto_reload,
    )

    def render(path: str, data: dict[str, Any]) -> str:
        name = Path(path)
        if name.is_relative_to(root):
            name = name.relative_to(root)
        template = env.get_template(name.as_posix())
        return template.render(data)

    return render


__all__ = ["kida_renderer"]
