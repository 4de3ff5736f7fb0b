"""
Test configuration and fixtures.
"""

import pytest
from pathlib import Path
import tempfile
import shutil


# 60 bases wrapped at 10 per line, plus a 5 base record
SEQ1 = "".join("ACGT"[(i * i + i // 4) % 4] for i in range(60))
SEQ2 = "GATTA"


def write_fasta_file(path, records, width=10, newline="\n", trailing_newline=True):
    """Write (header, sequence) pairs wrapped at width with the given terminator."""
    lines = []
    for header, sequence in records:
        lines.append(f">{header}")
        lines.extend(sequence[i:i + width] for i in range(0, len(sequence), width))
    text = newline.join(lines)
    if trailing_newline:
        text += newline
    path.write_bytes(text.encode("ascii"))
    return path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir)


@pytest.fixture
def sample_sequences():
    """De-wrapped sequences of sample_fasta, in file order."""
    return {"seq1": SEQ1, "seq2": SEQ2}


@pytest.fixture
def sample_fasta(temp_dir):
    """Two records: seq1 (60 bp, 10 per line) and seq2 (5 bp), LF line endings."""
    return write_fasta_file(
        temp_dir / "sample.fa",
        [("seq1 first record", SEQ1), ("seq2", SEQ2)],
    )


@pytest.fixture
def crlf_fasta(temp_dir):
    """Same records as sample_fasta with CRLF line endings."""
    return write_fasta_file(
        temp_dir / "crlf.fa",
        [("seq1 first record", SEQ1), ("seq2", SEQ2)],
        newline="\r\n",
    )


@pytest.fixture
def multi_fasta(temp_dir):
    """Five records of assorted lengths, last line without terminator."""
    records = [
        (f"contig{i} len={n}", "".join("TGCA"[(i + j * 3) % 4] for j in range(n)))
        for i, n in enumerate([23, 10, 1, 47, 9])
    ]
    path = write_fasta_file(temp_dir / "multi.fa", records, trailing_newline=False)
    return path, {header.split()[0]: seq for header, seq in records}


@pytest.fixture
def headerless_fasta(temp_dir):
    """A file that does not start with '>'."""
    path = temp_dir / "headerless.fa"
    path.write_text("ACGTACGTAC\nACGT\n")
    return path
