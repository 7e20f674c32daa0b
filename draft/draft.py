import logging

import click

from draft import patterns
from draft.code_writer import write_code_file
from draft.errors import DraftError
from draft.expander import Draft
from draft.sections import SectionTable


def setup_logging(debug, verbose):
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def read_document(file_path):
    with open(file_path, "r", encoding="utf-8") as f:
        return f.read()


@click.group()
@click.option("--debug/--no-debug", default=False)
@click.option("--verbose/--quiet", default=False)
@click.option("--language", "-l", type=str, default=patterns.DEFAULT_LANGUAGE, show_default=True)
@click.pass_context
def draft(ctx, debug, verbose, language):
    ctx.ensure_object(dict)
    ctx.obj["DEBUG"] = debug
    ctx.obj["VERBOSE"] = verbose
    ctx.obj["LANGUAGE"] = language
    setup_logging(debug, verbose)


@draft.command()
@click.option("--section", "-s", type=str, default="", help="Section to expand; the unnamed section by default.")
@click.option("--output", "-o", type=click.Path(dir_okay=False))
@click.option("--base-dir", type=click.Path(file_okay=False, dir_okay=True, writable=True, readable=True))
@click.argument(
    "file_paths",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
    nargs=-1,
    required=True,
)
@click.pass_context
def tangle(ctx, section, output, base_dir, file_paths):
    if output and len(file_paths) > 1:
        raise click.UsageError("--output takes exactly one input file")
    any_failed = False
    for file_path in file_paths:
        web = Draft.from_document(read_document(file_path), ctx.obj["LANGUAGE"])
        try:
            code = web.expand(section)
        except DraftError as e:
            click.echo(f'Error while processing "{file_path}": {e.message}', err=True)
            any_failed = True
            continue
        for error in web.errors:
            click.echo(f'Warning while processing "{file_path}": {error}', err=True)
        if output:
            write_code_file(code, output, base_dir)
        else:
            click.echo(code, nl=False)
    if any_failed:
        ctx.exit(1)


@draft.command()
@click.argument("file_path", type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True))
@click.pass_context
def sections(ctx, file_path):
    table = SectionTable.from_document(read_document(file_path), ctx.obj["LANGUAGE"])
    for key in table.keys():
        fragments = table.fragments(key)
        click.echo(f"{patterns.SECTION_OPEN}{key}{patterns.SECTION_CLOSE}: {len(fragments)} fragment(s)")
        if ctx.obj["VERBOSE"]:
            for fragment in fragments:
                continued = " (continued)" if fragment.is_continuation else ""
                click.echo(
                    f"    line {fragment.anchor.line}, col {fragment.anchor.column}: "
                    f"{len(fragment.body)} characters{continued}"
                )


def main():
    draft(obj={}, auto_envvar_prefix="DRAFT")


if __name__ == "__main__":
    main()
