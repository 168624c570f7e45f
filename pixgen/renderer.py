"""
GalleryRenderer - Copies the viewer assets and renders index.html.
"""

import logging
import os
import shutil
from typing import List, Optional

from bottle import SimpleTemplate

from .manifest import TemplateInput


PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
ASSETS_DIR = os.path.join(PACKAGE_DIR, 'assets')
INDEX_TEMPLATE = os.path.join(PACKAGE_DIR, 'templates', 'index.tpl')
INDEX_FILENAME = 'index.html'


class GalleryRenderer:
    """
    Writes the static parts of a gallery into an output directory.
    """

    def __init__(
        self,
        output_dir: str,
        template_path: str = INDEX_TEMPLATE,
        assets_dir: str = ASSETS_DIR,
        logger: Optional[logging.Logger] = None
    ):
        self.output_dir = output_dir
        self.template_path = template_path
        self.assets_dir = assets_dir
        self.logger = logger or logging.getLogger(__name__)

    def copy_assets(self) -> List[str]:
        """
        Copy the viewer assets into the output directory.

        Returns:
            Names of the copied files, relative to the output directory
        """
        copied = []
        for root, _dirs, files in os.walk(self.assets_dir):
            rel_root = os.path.relpath(root, self.assets_dir)
            dest_root = os.path.normpath(os.path.join(self.output_dir, rel_root))
            os.makedirs(dest_root, exist_ok=True)
            for name in sorted(files):
                shutil.copyfile(os.path.join(root, name), os.path.join(dest_root, name))
                copied.append(os.path.normpath(os.path.join(rel_root, name)))
                self.logger.debug(f"Copied asset {name} to {dest_root}")
        return copied

    def render_index(self, template_input: TemplateInput) -> str:
        """
        Render index.html from a complete manifest.

        Args:
            template_input: Assembled manifest data

        Returns:
            Path of the written index.html
        """
        with open(self.template_path, 'r', encoding='utf-8') as f:
            template = SimpleTemplate(source=f.read())

        html = template.render(
            title=template_input.title,
            generated=template_input.generated,
            pix=template_input.pix,
        )

        path = os.path.join(self.output_dir, INDEX_FILENAME)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(html)
        self.logger.info(f"Wrote {path} with {len(template_input.pix)} photos")
        return path
