"""
Test the preview figure (headless)
"""
import numpy as np

from kaleido.viz import Visualizer


def test_before_after_builds_two_panels():
    img = np.zeros((4, 6, 3), dtype=np.uint8)
    fig = Visualizer.before_after(img, img, show=False)
    assert len(fig.axes) == 2
    assert [ax.get_title() for ax in fig.axes] == ["Input", "Kaleidoscope"]
