from formula_pad.client.renderer import render, render_text
from formula_pad.client.state import UIState


def test_idle_view():
    view = render(UIState())
    assert view.raw_latex == ""
    assert not view.show_loader
    assert view.math_field is None
    assert view.error is None
    assert view.duration_label is None


def test_loading_hides_result_and_error():
    view = render(UIState(latex_text="x", error_message="bad", is_loading=True))
    assert view.show_loader
    assert view.math_field is None
    assert view.error is None
    assert view.raw_latex == "x"


def test_latex_view():
    view = render(UIState(latex_text="x^{2}+1", last_request_duration_ms=812))
    assert view.math_field == "x^{2}+1"
    assert view.error is None
    assert view.duration_label == "812 ms"
    assert render_text(view) == "x^{2}+1\n(812 ms)"


def test_empty_error_is_still_shown():
    view = render(UIState(error_message=""))
    assert view.error == ""
    assert view.math_field is None
    assert render_text(view) == "Error: "
