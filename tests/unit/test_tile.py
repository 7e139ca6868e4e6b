"""
Tests for wavelet noise tile generation, caching and the process-wide tile.

Author: B.G.
"""

import threading

import numpy as np
import pytest
import taichi as ti

from pywavenoise.filters import TileSizeError
from pywavenoise.noise import (
    build_noise_tile,
    generate_tile,
    get_noise_tile,
    load_tile,
    parity_offset,
    parity_shift_kernel,
    reset_noise_tile,
    save_tile,
    tile_volume,
)

# Initialize Taichi once for the entire test module
ti.init(arch=ti.cpu)

N = 128


def test_parity_offset_is_odd():
    assert parity_offset(128) == 65
    assert parity_offset(64) == 33
    assert parity_offset(6) == 3
    assert parity_offset(10) == 5


def test_parity_shift_kernel_matches_roll_transpose():
    src = np.random.RandomState(0).standard_normal(N ** 3).astype(np.float32)
    dst = np.zeros_like(src)
    parity_shift_kernel(src, dst, N, 65)

    rolled = np.roll(src.reshape(N, N, N), shift=(-65, -65, -65), axis=(0, 1, 2))
    expected = rolled.transpose(2, 1, 0).ravel()
    np.testing.assert_array_equal(dst, expected)


def test_build_rejects_other_tile_sizes():
    with pytest.raises(TileSizeError):
        build_noise_tile(seed=1, n=64)


def test_tile_build_shape_and_dtype(full_tile):
    tile, residual = full_tile
    assert tile.shape == (N ** 3,)
    assert tile.dtype == np.float32
    assert residual.shape == (N ** 3,)
    assert np.all(np.isfinite(tile))


def test_tile_build_is_deterministic(full_tile):
    tile, _ = full_tile
    again = build_noise_tile(seed=1234)
    np.testing.assert_array_equal(tile, again)


def test_tile_build_depends_on_seed(full_tile):
    tile, _ = full_tile
    other = build_noise_tile(seed=4321)
    assert not np.array_equal(tile, other)


def test_tile_build_residual_is_centred(full_tile):
    _, residual = full_tile
    assert abs(float(residual.mean())) < 0.01
    assert float(residual.std()) > 0.1


def test_tile_build_parity_correction(full_tile):
    tile, residual = full_tile
    shifted = np.roll(residual.reshape(N, N, N), shift=(-65,) * 3, axis=(0, 1, 2))
    expected = residual + shifted.transpose(2, 1, 0).ravel()
    np.testing.assert_array_equal(tile, expected)


def test_tile_build_is_band_limited(full_tile):
    # Removing the coarse part leaves little energy at the lowest frequencies
    tile, _ = full_tile
    spectrum = np.abs(np.fft.rfftn(tile_volume(tile).astype(np.float64))) ** 2
    low = spectrum[:4, :4, :4].mean()
    high = spectrum[32:64, 32:64, 16:48].mean()
    assert low < 0.1 * high


def test_tile_volume_is_view(full_tile):
    tile, _ = full_tile
    vol = tile_volume(tile)
    assert vol.shape == (N, N, N)
    assert np.shares_memory(vol, tile)
    assert vol[1, 2, 3] == tile[3 + 2 * N + 1 * N * N]


def test_generate_tile_single_build(build_counter):
    first = generate_tile(verbose=False)
    second = generate_tile(verbose=False)
    assert first is second
    assert get_noise_tile() is first
    assert build_counter.calls == 1


def test_generate_tile_is_read_only(build_counter):
    tile = generate_tile(verbose=False)
    assert not tile.flags.writeable
    with pytest.raises(ValueError):
        tile[0] = 1.0


def test_generate_tile_concurrent_callers(slow_build_counter):
    counter = slow_build_counter

    results = []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        results.append(generate_tile(verbose=False))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert counter.calls == 1
    assert len(results) == 8
    assert all(r is results[0] for r in results)


def test_reset_noise_tile(build_counter):
    first = generate_tile(verbose=False)
    reset_noise_tile()
    assert get_noise_tile() is None
    second = generate_tile(verbose=False)
    assert first is not second
    assert build_counter.calls == 2


def test_generate_tile_writes_and_loads_cache(build_counter, tmp_path, capsys):
    path = tmp_path / "tile.bin"
    built = generate_tile(load_from_file=True, filename=path, seed=3)
    assert path.exists()
    assert path.stat().st_size == N ** 3 * 4
    assert build_counter.calls == 1
    out = capsys.readouterr().out
    assert "saved" in out

    reset_noise_tile()
    loaded = generate_tile(load_from_file=True, filename=path)
    assert build_counter.calls == 1
    np.testing.assert_array_equal(loaded, built)
    assert not loaded.flags.writeable
    assert "loaded" in capsys.readouterr().out


def test_generate_tile_without_cache_flag_ignores_file(build_counter, tmp_path):
    path = tmp_path / "tile.bin"
    save_tile(np.zeros(N ** 3, dtype=np.float32), path)
    tile = generate_tile(load_from_file=False, filename=path, verbose=False)
    assert build_counter.calls == 1
    assert np.any(tile != 0.0)


def test_generate_tile_wrong_size_cache_is_a_miss(build_counter, tmp_path):
    path = tmp_path / "short.bin"
    np.zeros(100, dtype=np.float32).tofile(path)
    tile = generate_tile(load_from_file=True, filename=path, verbose=False)
    assert build_counter.calls == 1
    assert tile.shape == (N ** 3,)
    # The rebuilt tile replaces the unusable cache
    assert path.stat().st_size == N ** 3 * 4


def test_load_tile_missing_file(tmp_path):
    assert load_tile(tmp_path / "missing.bin") is None


def test_save_tile_unwritable_location(tmp_path):
    assert save_tile(np.zeros(8, dtype=np.float32), tmp_path / "no" / "such" / "dir.bin") is False


def test_save_load_roundtrip_raw_layout(tmp_path):
    data = np.arange(N ** 3, dtype=np.float32)
    path = tmp_path / "raw.bin"
    assert save_tile(data, path)
    raw = np.fromfile(path, dtype=np.float32)
    np.testing.assert_array_equal(raw, data)
    np.testing.assert_array_equal(load_tile(path), data)
