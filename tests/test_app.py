import gradio as gr
import pytest

import app
from errors import RenderingFailure
from factories import FakeIssuer
from models import CertificateState, HomeState

SLOTS = 3


def _visible(update):
    return update["visible"]


def _screens(outputs):
    # outputs[0] is the controller, then the four screen columns
    return [_visible(update) for update in outputs[1:5]]


def _radios(outputs):
    return outputs[7:7 + SLOTS]


def _certificate_parts(outputs):
    result_md, name_input, download_btn, cert_file = outputs[7 + SLOTS:]
    return result_md, name_input, download_btn, cert_file


def test_render_home(controller):
    outputs = (controller, *app.render(controller, SLOTS))
    assert _screens(outputs) == [True, False, False, False]
    assert len(outputs) == 1 + 4 + 2 + SLOTS + 4


def test_course_screen_lists_lessons(controller):
    outputs = app.on_select_course(controller, "it-basics", SLOTS)
    assert _screens(outputs) == [False, True, False, False]
    course_md = outputs[5]
    assert "## IT Basics" in course_md
    assert "1. **Hardware vs Software**" in course_md
    assert "2. **Networking Basics**" in course_md


def test_quiz_screen_shows_one_radio_per_question(controller):
    app.on_select_course(controller, "it-basics", SLOTS)
    outputs = app.on_take_quiz(controller, SLOTS)
    assert _screens(outputs) == [False, False, True, False]
    assert "IT Basics Quiz" in outputs[6]
    radios = _radios(outputs)
    assert [_visible(r) for r in radios] == [True, False, False]
    assert radios[0]["choices"] == ["A", "B", "C"]
    assert radios[0]["value"] is None


def test_select_answer_ignores_cleared_radio(controller):
    app.on_select_course(controller, "it-basics", SLOTS)
    app.on_take_quiz(controller, SLOTS)
    app.on_select_answer(controller, 0, None)
    assert controller.state.attempt.selections == (None,)
    app.on_select_answer(controller, 0, 1)
    assert controller.state.attempt.selections == (1,)


def test_pass_flow_shows_name_field(controller):
    app.on_select_course(controller, "it-basics", SLOTS)
    app.on_take_quiz(controller, SLOTS)
    app.on_select_answer(controller, 0, 1)
    outputs = app.on_submit(controller, SLOTS)
    assert _screens(outputs) == [False, False, False, True]
    result_md, name_input, download_btn, cert_file = _certificate_parts(outputs)
    assert "Congratulations! You passed with 100%." in result_md
    assert _visible(name_input) is True
    assert _visible(download_btn) is True
    assert _visible(cert_file) is False


def test_fail_flow_hides_name_field(controller):
    app.on_select_course(controller, "it-basics", SLOTS)
    app.on_take_quiz(controller, SLOTS)
    app.on_select_answer(controller, 0, 0)
    outputs = app.on_submit(controller, SLOTS)
    result_md, name_input, download_btn, _ = _certificate_parts(outputs)
    assert "Sorry, you scored 0%. Please try again." in result_md
    assert _visible(name_input) is False
    assert _visible(download_btn) is False


def test_invalid_transition_surfaces_as_gradio_error(controller):
    with pytest.raises(gr.Error):
        app.on_take_quiz(controller, SLOTS)
    assert isinstance(controller.state, HomeState)


def test_download_returns_file(controller):
    issuer = FakeIssuer()
    app.on_select_course(controller, "it-basics", SLOTS)
    app.on_take_quiz(controller, SLOTS)
    app.on_select_answer(controller, 0, 1)
    app.on_submit(controller, SLOTS)
    _, cert_file = app.on_download(controller, "Amina", issuer)
    assert cert_file["visible"] is True
    assert cert_file["value"] == "certificate.pdf"
    assert issuer.calls == [("Amina", "IT Basics", 100)]


def test_download_failure_keeps_session(controller):
    issuer = FakeIssuer(error=RenderingFailure("Could not generate the certificate: boom"))
    app.on_select_course(controller, "it-basics", SLOTS)
    app.on_take_quiz(controller, SLOTS)
    app.on_select_answer(controller, 0, 1)
    app.on_submit(controller, SLOTS)
    _, cert_file = app.on_download(controller, "Amina", issuer)
    assert cert_file["visible"] is False
    assert isinstance(controller.state, CertificateState)
    assert controller.state.learner_name == "Amina"
    assert controller.state.score.percentage == 100


def test_go_home_resets(controller):
    app.on_select_course(controller, "it-basics", SLOTS)
    app.on_take_quiz(controller, SLOTS)
    app.on_select_answer(controller, 0, 1)
    app.on_submit(controller, SLOTS)
    app.on_name_change(controller, "Amina")
    outputs = app.on_go_home(controller, SLOTS)
    assert _screens(outputs) == [True, False, False, False]
    assert isinstance(controller.state, HomeState)
    _, name_input, _, _ = _certificate_parts(outputs)
    assert name_input["value"] == ""


def test_create_interface_builds_blocks(catalog):
    blocks = app.create_interface(catalog, FakeIssuer())
    assert isinstance(blocks, gr.Blocks)


def test_name_change_ignored_after_failing(controller):
    app.on_select_course(controller, "it-basics", SLOTS)
    app.on_take_quiz(controller, SLOTS)
    app.on_select_answer(controller, 0, 0)
    app.on_submit(controller, SLOTS)
    before = controller.state
    app.on_name_change(controller, "Amina")
    assert controller.state == before
    assert controller.state.learner_name == ""


def test_second_submit_surfaces_as_gradio_error(controller):
    app.on_select_course(controller, "it-basics", SLOTS)
    app.on_take_quiz(controller, SLOTS)
    app.on_select_answer(controller, 0, 1)
    app.on_submit(controller, SLOTS)
    before = controller.state
    with pytest.raises(gr.Error):
        app.on_submit(controller, SLOTS)
    assert controller.state == before
