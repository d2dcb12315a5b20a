import gzip

import pytest
from typer.testing import CliRunner

from tests.conftest import flip_block_crc, variant_lines
from vcf_batcher.cli import app

pytestmark = [pytest.mark.integration]

runner = CliRunner()


def test_cli_writes_batches_and_reports(write_vcf, tmp_path):
    src = write_vcf("input.vcf", variant_lines(25))
    out_dir = tmp_path / "out"

    result = runner.invoke(app, [str(src), str(out_dir), "--batch-size", "10"])

    assert result.exit_code == 0, result.output
    assert "Saving batch_01.vcf" in result.output
    assert "Saving batch_03.vcf" in result.output
    assert "Saved 3 batches with 10 samples" in result.output
    assert "Extracted variants into batches of size 10 in:" in result.output
    assert sorted(p.name for p in out_dir.iterdir()) == [
        "batch_01.vcf",
        "batch_02.vcf",
        "batch_03.vcf",
    ]


def test_cli_compression_option(write_vcf, tmp_path):
    src = write_vcf("input.vcf", variant_lines(4))
    out_dir = tmp_path / "out"

    result = runner.invoke(app, [str(src), str(out_dir), "-b", "4", "-c", "Fast"])

    assert result.exit_code == 0, result.output
    payload = gzip.decompress((out_dir / "batch_01.vcf.gz").read_bytes()).decode()
    assert payload.count("\n") == 3 + 4


def test_cli_unknown_compression_writes_plain_files(write_vcf, tmp_path):
    src = write_vcf("input.vcf", variant_lines(2))
    out_dir = tmp_path / "out"

    result = runner.invoke(app, [str(src), str(out_dir), "-c", "zstd"])

    assert result.exit_code == 0, result.output
    assert (out_dir / "batch_01.vcf").is_file()


def test_cli_reads_config_file(write_vcf, tmp_path):
    src = write_vcf("input.vcf", variant_lines(6))
    cfg = tmp_path / "batcher.yaml"
    cfg.write_text("batch_size: 3\ncompression_level: best\n")
    out_dir = tmp_path / "out"

    result = runner.invoke(app, [str(src), str(out_dir), "--config", str(cfg)])

    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in out_dir.iterdir()) == ["batch_01.vcf.gz", "batch_02.vcf.gz"]


def test_cli_missing_input_exits_nonzero(tmp_path):
    result = runner.invoke(app, [str(tmp_path / "missing.vcf"), str(tmp_path / "out")])

    assert result.exit_code == 1
    assert "Error" in result.output
    assert not (tmp_path / "out").exists()


def test_cli_invalid_config_exits_nonzero(write_vcf, tmp_path):
    src = write_vcf("input.vcf", variant_lines(2))
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("batch_size: -3\n")

    result = runner.invoke(app, [str(src), str(tmp_path / "out"), "--config", str(cfg)])

    assert result.exit_code == 1


def test_cli_rejects_zero_batch_size(write_vcf, tmp_path):
    src = write_vcf("input.vcf", variant_lines(2))

    result = runner.invoke(app, [str(src), str(tmp_path / "out"), "--batch-size", "0"])

    assert result.exit_code == 2


def test_cli_corrupt_block_mid_stream_reports_error(write_vcf, tmp_path):
    src = write_vcf("big.vcf.gz", variant_lines(5000))
    flip_block_crc(src, 1)
    out_dir = tmp_path / "out"

    result = runner.invoke(app, [str(src), str(out_dir), "--batch-size", "100"])

    assert result.exit_code == 1
    assert not isinstance(result.exception, RuntimeError)
    assert "Error:" in result.output
    assert "Failed reading" in result.output
    # Batches cut before the corrupt block stay on disk.
    assert (out_dir / "batch_01.vcf").is_file()


def test_cli_corrupt_first_block_writes_nothing(write_vcf, tmp_path):
    src = write_vcf("big.vcf.gz", variant_lines(5000))
    flip_block_crc(src, 0)
    out_dir = tmp_path / "out"

    result = runner.invoke(app, [str(src), str(out_dir)])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert not out_dir.exists()
