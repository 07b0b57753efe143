"""PDF conversion service"""

import asyncio
import logging
import os
import shutil
import subprocess
import tempfile
from typing import Callable

from services.models import ConversionResult
from utils.errors import ConversionError

logger = logging.getLogger(__name__)

Converter = Callable[[str, str], None]

# Common install locations when soffice is not on PATH
LIBREOFFICE_PATHS = [
    '/Applications/LibreOffice.app/Contents/MacOS/soffice',
    '/opt/libreoffice/program/soffice',
    '/opt/libreoffice/program/soffice.bin',
    '/opt/bin/soffice',
    '/usr/lib/libreoffice/program/soffice',
]


def _find_libreoffice() -> str:
    """
    Find the LibreOffice executable

    Returns:
        str: Path to LibreOffice executable

    Raises:
        ConversionError: If LibreOffice is not found
    """
    for name in ('soffice', 'libreoffice'):
        local_path = shutil.which(name)
        if local_path:
            return local_path

    for path in LIBREOFFICE_PATHS:
        if os.path.exists(path):
            return path

    raise ConversionError(
        "LibreOffice not found in PATH or in the usual install locations. "
        "Install LibreOffice so that 'soffice' is available."
    )


def convert_docx_to_pdf(input_path: str, output_path: str) -> None:
    """
    Convert a Word document to PDF using LibreOffice

    The conversion runs in a private temporary directory so concurrent
    conversions never see each other's intermediate files; the finished PDF
    is then moved to output_path.

    Args:
        input_path: Path of the .doc/.docx file
        output_path: Where the PDF must be written

    Raises:
        ConversionError: If conversion fails
    """
    libreoffice_path = _find_libreoffice()

    temp_dir = tempfile.mkdtemp(prefix='docx2pdf_')
    try:
        # Set HOME to a writable location to avoid first-run setup issues,
        # and give each run its own profile so parallel runs don't collide
        env = os.environ.copy()
        env.setdefault("HOME", tempfile.gettempdir())
        profile_dir = os.path.join(temp_dir, 'profile')
        try:
            result = subprocess.run(
                [
                    libreoffice_path,
                    '--headless', '--nologo', '--nodefault', '--invisible', '--nofirststartwizard',
                    f'-env:UserInstallation=file://{profile_dir}',
                    '--convert-to', 'pdf',
                    '--outdir', temp_dir,
                    input_path,
                ],
                capture_output=True,
                text=True,
                env=env,
            )
        except OSError as e:
            raise ConversionError(str(e)) from e

        if result.returncode != 0:
            raise ConversionError(result.stderr.strip() or f"LibreOffice exited with status {result.returncode}")

        # LibreOffice creates PDF with the same base name as the input file
        base_name = os.path.splitext(os.path.basename(input_path))[0]
        produced_path = os.path.join(temp_dir, base_name + '.pdf')

        if not os.path.exists(produced_path):
            raise ConversionError(result.stderr.strip() or "PDF file was not created")

        shutil.move(produced_path, output_path)

    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)


async def convert(
    input_path: str,
    output_path: str,
    converter: Converter = convert_docx_to_pdf,
) -> ConversionResult:
    """
    Run a blocking converter without blocking the event loop

    Args:
        input_path: Document to convert
        output_path: Where the PDF must be written
        converter: Blocking callable doing the actual conversion

    Returns:
        ConversionResult for output_path

    Raises:
        ConversionError: With the converter's message unmodified
    """
    try:
        await asyncio.to_thread(converter, input_path, output_path)
    except ConversionError:
        raise
    except Exception as e:
        raise ConversionError(str(e)) from e

    return ConversionResult(
        output_path=output_path,
        output_filename=os.path.basename(output_path),
    )
