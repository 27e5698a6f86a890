"""
Management command to render a catalog XML export to HTML.

Useful for previewing what {% display_courses %} will embed, or for checking
which sections an export contains before choosing tabs for a page.
"""

from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from catalog.rendering.loader import CatalogLoadError, load_catalog
from catalog.rendering.renderer import render_course_catalog
from catalog.rendering.sections import discover_sections


class Command(BaseCommand):
    help = 'Render a course catalog XML export to an HTML fragment'

    def add_arguments(self, parser):
        parser.add_argument(
            'url',
            type=str,
            help='URL or path of the catalog XML (e.g. https://catalog.example.edu/x/index.xml)',
        )
        parser.add_argument(
            '--tabs',
            type=str,
            default='',
            help='Comma-separated sections to render (default: all)',
        )
        parser.add_argument(
            '--remove-paragraph',
            type=str,
            default='',
            help='Comma-separated 1-indexed Overview paragraphs to remove',
        )
        parser.add_argument(
            '--output',
            type=str,
            help='Write the HTML to this file instead of stdout',
        )
        parser.add_argument(
            '--list-sections',
            action='store_true',
            help='List the sections found in the XML and exit',
        )

    def handle(self, *args, **options):
        url = options.get('url')
        tabs = options.get('tabs')
        remove_paragraph = options.get('remove_paragraph')
        output = options.get('output')

        if options.get('list_sections'):
            try:
                sections = discover_sections(load_catalog(url))
            except CatalogLoadError as e:
                raise CommandError(str(e))

            for section in sections.values():
                self.stdout.write(f'{section.node_name}\t{section.label}')
            self.stdout.write(
                self.style.SUCCESS(f'{len(sections)} sections found')
            )
            return

        html = render_course_catalog(url, tabs, remove_paragraph)

        if output:
            Path(output).write_text(html, encoding='utf-8')
            self.stdout.write(self.style.SUCCESS(f'Wrote {len(html)} characters to {output}'))
        else:
            self.stdout.write(html)
