"""Pytest fixtures for the vcf_mcorr test suite."""

from __future__ import annotations

import gzip

import pytest

HEADER = (
    "##fileformat=VCFv4.2\n"
    "##contig=<ID=chr1>\n"
)


def vcf_line(pos, genotypes, ref="A", alt="G", chrom="chr1", fmt="GT"):
    """Build one VCF data line; ``genotypes`` is a list of sample GT strings."""
    fields = [chrom, str(pos), ".", ref, alt, "50", "PASS", "."]
    if fmt is not None:
        fields.append(fmt)
    fields.extend(genotypes)
    return "\t".join(fields) + "\n"


def header_line(n_samples):
    cols = ["#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO", "FORMAT"]
    cols += [f"S{i}" for i in range(n_samples)]
    return "\t".join(cols) + "\n"


@pytest.fixture
def write_vcf(tmp_path):
    """Return a function writing data lines to a VCF in ``tmp_path``."""

    def _write(lines, name="test.vcf", n_samples=2):
        path = tmp_path / name
        text = HEADER + header_line(n_samples) + "".join(lines)
        if name.endswith(".gz"):
            with gzip.open(path, "wt") as fh:
                fh.write(text)
        else:
            path.write_text(text)
        return str(path)

    return _write


@pytest.fixture
def two_site_vcf(write_vcf) -> str:
    """Sites at 10 and 15 with haploid calls 1 1 0 0 and 1 0 1 0."""
    return write_vcf(
        [
            vcf_line(10, ["1", "1", "0", "0"]),
            vcf_line(15, ["1", "0", "1", "0"]),
        ],
        n_samples=4,
    )


@pytest.fixture
def phased_vcf(write_vcf) -> str:
    """Diploid phased calls with one indel and one multi-allelic site."""
    return write_vcf(
        [
            vcf_line(100, ["0|1", "1|1"]),
            vcf_line(120, ["0|0", "1|0"], ref="AT", alt="A"),
            vcf_line(130, ["1|1", "0|1"]),
            vcf_line(140, ["0|1", "0|0"], alt="G,T"),
            vcf_line(150, ["1|0", "1|1"], ref="C", alt="T"),
        ]
    )
