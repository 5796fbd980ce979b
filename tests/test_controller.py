from dataclasses import replace

import numpy as np
import pytest

from buddha.buddhabrot import controller as controller_module
from buddha.buddhabrot.controller import BuddhabrotController, RenderState
from buddha.utils.buddhabrot_utils import BuddhabrotConfig, PlaneRegion


@pytest.fixture
def config():
    return BuddhabrotConfig(
        image_size=8,
        num_samples=500,
        max_iterations=20,
        region=PlaneRegion(complex(-2, -1.5), complex(1, 1.5)),
        seed=5,
        num_workers=2,
    )


@pytest.fixture
def passes(monkeypatch):
    calls = []
    render_pass = controller_module.render_pass

    def counting_render_pass(*args, **kwargs):
        calls.append(args[0])
        return render_pass(*args, **kwargs)

    monkeypatch.setattr(controller_module, "render_pass", counting_render_pass)
    return calls


def test_starts_stale(config):
    controller = BuddhabrotController(config)
    assert controller.state is RenderState.STALE
    assert controller.image is None


def test_first_display_computes(config, passes):
    controller = BuddhabrotController(config)
    image = controller.get_image()
    assert controller.state is RenderState.FRESH
    assert image.shape == (8, 8)
    assert image.dtype == np.uint8
    assert len(passes) == 1


def test_fresh_image_is_reused(config, passes):
    controller = BuddhabrotController(config)
    first = controller.get_image()
    assert controller.get_image() is first
    assert len(passes) == 1


def test_invalidate_forces_new_pass(config, passes):
    controller = BuddhabrotController(config)
    controller.get_image()
    controller.invalidate()
    assert controller.state is RenderState.STALE
    controller.get_image()
    assert len(passes) == 2


def test_config_change_makes_stale(config, passes):
    controller = BuddhabrotController(config)
    controller.get_image()
    controller.set_config(replace(config, max_iterations=30))
    assert controller.state is RenderState.STALE
    controller.get_image()
    assert passes[-1].max_iterations == 30


def test_invalid_config_is_refused(config):
    controller = BuddhabrotController(config)
    controller.get_image()
    bad = replace(config)
    bad.num_samples = -1
    with pytest.raises(ValueError):
        controller.set_config(bad)
    assert controller.config is config
    assert controller.state is RenderState.FRESH


def test_new_seed_reseeds(config):
    first = BuddhabrotController(config).get_image()
    controller = BuddhabrotController(replace(config, seed=6))
    controller.get_image()
    controller.set_config(config)
    np.testing.assert_array_equal(controller.get_image(), first)


def test_gpu_without_opencl_falls_back_to_cpu(config, monkeypatch):
    monkeypatch.setattr(controller_module, "PY_OPEN_CL_INSTALLED", False)
    controller = BuddhabrotController(replace(config, gpu=True))
    image = controller.get_image()
    np.testing.assert_array_equal(image, BuddhabrotController(config).get_image())


def test_config_change_with_same_seed_matches_fresh_run(config):
    changed = replace(config, max_iterations=30)
    controller = BuddhabrotController(config)
    controller.get_image()
    controller.set_config(changed)
    np.testing.assert_array_equal(
        controller.get_image(), BuddhabrotController(changed).get_image()
    )


def test_recompute_continues_the_generator(config):
    controller = BuddhabrotController(config)
    first = controller.get_image()
    controller.invalidate()
    second = controller.get_image()
    assert not np.array_equal(first, second)
