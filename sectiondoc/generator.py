"""
File driver

Walks the input tree, queues every file that has language rules and turns
each one into an HTML page under the output root:

    read -> parse_sections -> highlight_sections -> render_docs -> generate_html

Files are processed strictly one at a time in the order they were queued.
"""

import logging
import os
import shlex
import shutil
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Optional

from .highlight import DEFAULT_COMMAND, highlight_sections
from .languages import can_handle, rules_for
from .parser import Section, parse_sections
from .render import STYLESHEET_NAME, generate_html, load_stylesheet, render_docs

logger = logging.getLogger(__name__)


def create_default_config() -> Dict[str, Any]:
    """Create default generator configuration."""
    return {
        'in_dir': '.',
        'out_dir': 'docs',
        'highlighter': list(DEFAULT_COMMAND),
        'tab_size': 2,
        'timeout': None,
        'stylesheet': None,
    }


@dataclass
class GeneratorConfig:
    """Generator settings"""
    in_dir: str = '.'
    out_dir: str = 'docs'
    highlighter: List[str] = field(default_factory=lambda: list(DEFAULT_COMMAND))
    tab_size: int = 2
    timeout: Optional[float] = None
    stylesheet: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.highlighter, str):
            self.highlighter = shlex.split(self.highlighter)
        self.in_dir = os.path.normpath(self.in_dir)
        self.out_dir = os.path.normpath(self.out_dir)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GeneratorConfig':
        defaults = create_default_config()
        defaults.update({k: v for k, v in data.items() if v is not None})
        try:
            tab_size = int(defaults['tab_size'])
            timeout = float(defaults['timeout']) if defaults['timeout'] is not None else None
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid config value: {e}") from e

        return cls(
            in_dir=defaults['in_dir'],
            out_dir=defaults['out_dir'],
            highlighter=defaults['highlighter'],
            tab_size=tab_size,
            timeout=timeout,
            stylesheet=defaults['stylesheet']
        )


class DocGenerator:
    """Generates documentation pages for a tree of source files"""

    def __init__(self, config: GeneratorConfig):
        self.config = config
        self.running = False
        self.file_queue: Deque[str] = deque()
        self.generated: List[str] = []

    def doc(self, files: List[str]):
        """Generate documentation for a list of paths relative to `in_dir`"""
        for filename in files:
            self.doc_file(filename)

    def doc_file(self, filename: str):
        """Queue a file, or every file below it if it is a directory"""
        full_path = os.path.join(self.config.in_dir, filename)
        if os.path.isdir(full_path):
            children = sorted(os.listdir(full_path))
            self.doc([os.path.normpath(os.path.join(filename, child)) for child in children])
        else:
            self.queue_file(filename)

    def queue_file(self, filename: str):
        """Queue a file and start processing if nothing is running yet"""
        if not can_handle(filename):
            logger.debug(f"Skipping {filename}: no language rules")
            return
        self.file_queue.append(filename)

        if not self.running:
            self.next_file()

    def next_file(self):
        """Process queued files until the queue is empty"""
        self.running = True
        try:
            while self.file_queue:
                self.generate_doc(self.file_queue.popleft())
        finally:
            self.running = False

    def generate_doc(self, filename: str) -> str:
        """Generate the page for one file and return the output path.

        Read errors propagate and stop the run.
        """
        source_path = os.path.join(self.config.in_dir, filename)
        with open(source_path, 'r', encoding='utf-8', errors='replace') as f:
            content = f.read()

        rules = rules_for(source_path)
        sections = parse_sections(content, rules)
        highlight_sections(
            sections,
            rules,
            command=self.config.highlighter,
            tab_size=self.config.tab_size,
            timeout=self.config.timeout
        )
        render_docs(sections)
        return self.render_html(sections, source_path)

    def render_html(self, sections: List[Section], source_path: str) -> str:
        """Write the rendered page for a file's sections"""
        out_file = self.out_file(source_path)
        html = generate_html(
            os.path.basename(source_path),
            sections,
            self.relative_dir(out_file)
        )

        os.makedirs(os.path.dirname(out_file), exist_ok=True)
        with open(out_file, 'w', encoding='utf-8') as f:
            f.write(html)

        self.copy_stylesheet()
        self.generated.append(out_file)
        logger.info(f"Generated: {os.path.relpath(out_file, self.config.out_dir)}")
        return out_file

    def out_file(self, source_path: str) -> str:
        """Output path for a source file: same relative path, plus .html"""
        rel_path = os.path.relpath(source_path, self.config.in_dir)
        return os.path.join(self.config.out_dir, rel_path) + '.html'

    def relative_dir(self, out_file: str) -> str:
        """Prefix leading from an output file back to the output root"""
        rel_dir = os.path.relpath(os.path.dirname(out_file), self.config.out_dir)
        if rel_dir == os.curdir:
            return ''
        return '../' * len(rel_dir.split(os.sep))

    def copy_stylesheet(self) -> str:
        """Write the shared stylesheet into the output root if it is missing.

        A configured stylesheet file replaces the packaged one.
        """
        css_path = os.path.join(self.config.out_dir, STYLESHEET_NAME)
        if not os.path.exists(css_path):
            os.makedirs(self.config.out_dir, exist_ok=True)
            if self.config.stylesheet:
                shutil.copyfile(self.config.stylesheet, css_path)
            else:
                with open(css_path, 'w', encoding='utf-8') as f:
                    f.write(load_stylesheet())
        return css_path
