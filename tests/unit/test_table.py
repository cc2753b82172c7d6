from hubbench._config import BenchConfig
from hubbench._runner import PLACEHOLDER, BenchmarkResult
from hubbench._table import render_table, write_table


def make_config():
    return BenchConfig(
        min_size_exp=3,
        max_size_exp=4,
        min_erasure_rate=0.0,
        max_erasure_rate=0.5,
        erasure_rate_step=0.5,
    )


def make_table():
    rates, exps = [0.0, 0.5], [3, 4]
    return [
        BenchmarkResult("insert", rates, exps, [["1.02", "0.98"], ["1.10", PLACEHOLDER]]),
        BenchmarkResult("sort", rates, exps, [["0.50", "0.51"], ["0.49", PLACEHOLDER]]),
    ]


def test_render_layout():
    text = render_table(make_table(), make_config())
    lines = text.splitlines()
    # blocks widen to "container size": 15 (label) + 2 + 2 * (14 + 2) + 1
    block, width = 14, 50
    lead = " " * 17
    assert lines[0] == lead + "-" * (width - 17)
    assert lines[1] == lead + f"{'| sizeof(element): 8':<{width - 18}}|"
    assert lines[3] == lead + f"| {'insert':<{block}}| {'sort':<{block}}|"
    assert lines[5] == lead + f"| {'container size':<{block}}" * 2 + "|"
    assert lines[6] == "-" * width
    assert lines[7] == "| erase rate     " + f"| {'1.E3 1.E4 ':<{block}}" * 2 + "|"
    assert lines[9] == (
        "| 0              "
        + f"| {'1.02 0.98 ':<{block}}"
        + f"| {'0.50 0.51 ':<{block}}|"
    )
    assert lines[10] == (
        "| 0.5            "
        + f"| {'1.10 ---- ':<{block}}"
        + f"| {'0.49 ---- ':<{block}}|"
    )
    assert lines[-1] == "-" * width
    assert len(lines) == 12


def test_blocks_widen_to_longest_title():
    config = BenchConfig(
        min_size_exp=1,
        max_size_exp=2,
        min_erasure_rate=0.0,
        max_erasure_rate=0.5,
        erasure_rate_step=0.5,
    )
    rates, exps = [0.0, 0.5], [1, 2]
    table = [
        BenchmarkResult("insert, erase, insert", rates, exps, [["1.02", "0.98"], ["1.10", "1.01"]]),
        BenchmarkResult("sort", rates, exps, [["0.50", "0.51"], ["0.49", "0.52"]]),
    ]
    lines = render_table(table, config).splitlines()
    assert len({len(line) for line in lines}) == 1
    assert len(lines[0]) == 15 + 2 + 2 * (len("insert, erase, insert") + 2) + 1
    assert "| insert, erase, insert| sort" in lines[3]


def test_rows_align():
    lines = render_table(make_table(), make_config()).splitlines()
    full_rows = [line for line in lines[6:] if line.startswith("|")]
    assert len({len(line) for line in full_rows}) == 1


def test_write_table(tmp_path):
    out = tmp_path / "table.txt"
    path = write_table(make_table(), out, make_config())
    assert path == out
    assert out.read_text(encoding="utf-8") == render_table(make_table(), make_config())
