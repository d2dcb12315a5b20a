from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from Bio import bgzf

HEADER = [
    "##fileformat=VCFv4.2",
    '##INFO=<ID=DP,Number=1,Type=Integer,Description="Total Depth">',
    "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tNA00001\tNA00002\tNA00003",
]


def variant_line(index: int) -> str:
    return f"1\t{1000 + index}\t.\tA\tG\t100\tPASS\tDP={index}\tGT\t0|0\t0|1\t1|1"


def variant_lines(count: int) -> list[str]:
    return [variant_line(i) for i in range(count)]


@pytest.fixture
def write_vcf(tmp_path) -> Callable[..., Path]:
    """Write header + records to ``tmp_path / name``.

    Names ending in ``.gz`` are written through a BGZF writer so they can be
    read back the same way bgzipped VCFs are.
    """

    def _write(
        name: str,
        records: Sequence[str],
        header: Sequence[str] = HEADER,
        *,
        newline: str = "\n",
    ) -> Path:
        path = tmp_path / name
        text = "".join(f"{line}{newline}" for line in [*header, *records])
        data = text.encode("utf-8")
        if name.endswith(".gz"):
            with bgzf.BgzfWriter(str(path), "wb") as handle:
                handle.write(data)
        else:
            path.write_bytes(data)
        return path

    return _write


def bgzf_block_offsets(data: bytes) -> list[int]:
    """Start offset of every BGZF block in ``data`` (BSIZE sits at bytes 16-17)."""
    offsets = []
    pos = 0
    while pos < len(data):
        offsets.append(pos)
        pos += int.from_bytes(data[pos + 16 : pos + 18], "little") + 1
    return offsets


def flip_block_crc(path: Path, block: int) -> None:
    """Corrupt the CRC32 trailer of one BGZF block in place."""
    data = bytearray(path.read_bytes())
    offsets = bgzf_block_offsets(bytes(data))
    crc_pos = offsets[block + 1] - 8
    data[crc_pos] ^= 0xFF
    path.write_bytes(bytes(data))
