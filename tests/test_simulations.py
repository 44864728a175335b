import csv
import io
import os

from simulations.common import (
    ExperimentSpec, ExperimentResult, format_sequence, histogram, l1_distance,
)
from simulations.compare import main
from simulations.methods import (
    UNWEIGHTED, WEIGHTED, get_method, methods_for,
)
from simulations.report import (
    histogram_rows, save_histograms, show_sequences, write_histogram_csv,
)
from simulations.run import resolve_weights, run_experiment, run_suite
from quasirandom_rolls.item_mapping import linear_weights
import pytest


SMALL = ExperimentSpec(histogram_rolls=(10, 100, 1000), rolls_show=20)


def test_spec_defaults():
    spec = ExperimentSpec()
    assert spec.num_items == 10
    assert spec.total_rolls == 1000000
    assert spec.rng_seed == spec.seed


def test_nondeterministic_spec_has_no_seed():
    assert ExperimentSpec(deterministic=False).rng_seed is None


@pytest.mark.parametrize('kwargs', [
    {'num_items': 0},
    {'rolls_show': -1},
    {'histogram_rolls': ()},
    {'histogram_rolls': (100, 10)},
    {'histogram_rolls': (0, 10)},
    {'base_character': 'ab'},
])
def test_spec_validation(kwargs):
    with pytest.raises(ValueError):
        ExperimentSpec(**kwargs)


def test_histogram_and_l1():
    h = histogram([0, 1, 1, 2, 9], 4, 3)
    assert h == [0.25, 0.5, 0.25]
    assert l1_distance(h, [0.25, 0.5, 0.25]) == 0.0
    with pytest.raises(ValueError):
        histogram([0, 1], 3, 2)


def test_format_sequence():
    assert format_sequence([0, 1, 9, 2], 3, '0') == '019'
    assert format_sequence([0, 1, 2], 3, 'a') == 'abc'


def test_result_length_is_checked():
    with pytest.raises(ValueError):
        ExperimentResult(method='x', label='X', spec=SMALL, sequence=[0])


def test_unweighted_methods():
    assert methods_for(UNWEIGHTED, SMALL) == [
        'sequential', 'white_noise', 'golden_ratio', 'pi', 'sqrt2',
    ]


def test_verbose_adds_one_minus_sequences():
    spec = ExperimentSpec(histogram_rolls=(10,), verbose=True)
    names = methods_for(WEIGHTED, spec)
    assert names[-2:] == ['one_minus_golden_ratio', 'one_minus_pi']
    assert 'alias_sobol' in names


def test_sequential_unweighted_is_exact():
    r = run_experiment(UNWEIGHTED, 'sequential', SMALL)
    assert r.sequence[:11] == [1, 2, 3, 4, 5, 6, 7, 8, 9, 0, 1]
    assert r.l1_error([0.1] * 10, 1000) == pytest.approx(0.0)


def test_white_noise_is_reproducible():
    a = run_experiment(WEIGHTED, 'alias_white_noise', SMALL)
    b = run_experiment(WEIGHTED, 'alias_white_noise', SMALL)
    assert a.sequence == b.sequence


def test_unweighted_suite():
    results = run_suite(UNWEIGHTED, SMALL)
    assert [r.label for r in results] == [
        'Sequential', 'White Noise', 'Golden Ratio', 'Pi', 'Sqrt2',
    ]
    for r in results:
        assert len(r.sequence) == 1000
        assert all(0 <= i < 10 for i in r.sequence)
        assert r.meta['weighted'] is False


def test_weighted_suite_converges():
    weights = linear_weights(10)
    results = run_suite(WEIGHTED, SMALL)
    by_method = {r.method: r for r in results}
    assert by_method['alias_r2'].l1_error(weights, 1000) < 0.05
    assert by_method['alias_sobol'].l1_error(weights, 1000) < 0.05
    assert by_method['golden_ratio'].l1_error(weights, 1000) < 0.05
    for r in results:
        assert r.meta['weighted'] is True


def test_weights_default_to_linear():
    assert resolve_weights(WEIGHTED, SMALL) == linear_weights(10)
    assert resolve_weights(UNWEIGHTED, SMALL) is None
    with pytest.raises(ValueError):
        resolve_weights(UNWEIGHTED, SMALL, [1.0])


def test_weight_count_must_match_items():
    with pytest.raises(ValueError):
        run_experiment(WEIGHTED, 'alias_r2', SMALL, [0.5, 0.5])


def test_unknown_methods_are_rejected():
    with pytest.raises(ValueError):
        get_method(UNWEIGHTED, 'alias_r2')
    with pytest.raises(ValueError):
        get_method('sideways', 'pi')
    with pytest.raises(ValueError):
        run_suite('sideways', SMALL)


def test_histogram_rows_with_target():
    r = run_experiment(UNWEIGHTED, 'sequential', SMALL)
    rows = histogram_rows([r], 10, target=[0.1] * 10)
    assert rows[0] == ['Weights'] + ['0.100000'] * 10
    assert rows[1] == ['Sequential'] + ['0.100000'] * 10


def test_csv_cells_are_quoted(tmp_path):
    path = write_histogram_csv([['Pi', '0.500000']], 'unweighted', 10, str(tmp_path))
    assert os.path.basename(path) == 'histogram_unweighted_10.csv'
    with open(path) as f:
        assert f.read() == '"Pi","0.500000"\n'


def test_save_histograms_writes_each_checkpoint(tmp_path):
    out = str(tmp_path / 'out')
    results = run_suite(UNWEIGHTED, SMALL)
    paths = save_histograms(results, SMALL, UNWEIGHTED, out)
    assert [os.path.basename(p) for p in paths] == [
        'histogram_unweighted_10.csv',
        'histogram_unweighted_100.csv',
        'histogram_unweighted_1000.csv',
    ]
    with open(paths[-1]) as f:
        rows = list(csv.reader(f))
    assert len(rows) == len(results)
    assert all(len(row) == 11 for row in rows)


def test_show_sequences():
    out = io.StringIO()
    r = run_experiment(UNWEIGHTED, 'sequential', SMALL)
    show_sequences('Unweighted', [r], SMALL, out=out)
    text = out.getvalue()
    assert '=================== Unweighted ===================' in text
    assert '  Sequential:\n    12345678901234567890\n' in text


def test_compare_main(tmp_path, capsys):
    out = tmp_path / 'csv'
    plot = tmp_path / 'convergence.png'
    code = main([
        '--rolls', '10', '100', '--show', '8', '--out', str(out),
        '--plot', str(plot),
    ])
    assert code == 0
    printed = capsys.readouterr().out
    assert 'Alias Sobol' in printed
    assert 'Alias R2 (Additive)' in printed
    assert (out / 'histogram_weighted_100.csv').exists()
    assert (out / 'histogram_unweighted_10.csv').exists()
    assert plot.exists()


def test_importing_compare_keeps_the_plot_backend():
    import importlib

    import matplotlib

    import simulations.compare

    backend = matplotlib.get_backend()
    importlib.reload(simulations.compare)
    assert matplotlib.get_backend() == backend
