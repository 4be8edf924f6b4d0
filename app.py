import logging
from typing import Any, List, Optional, Tuple

import gradio as gr

import config
from certificate import CertificateIssuer
from course_catalog import CourseCatalog
from errors import AcademyError, RenderingFailure
from models import CertificateState, CourseDetailState, HomeState, QuizState
from session_state import SessionController

# Configure logging
logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)


def format_course_content(state: CourseDetailState) -> str:
    """Format the lesson list for the course screen"""
    course = state.course
    lessons = "\n".join(
        f"{idx}. **{lesson.title}**: {lesson.content}"
        for idx, lesson in enumerate(course.lessons, start=1)
    )
    return f"""## {course.title}

{course.description}

### Lessons
{lessons}
"""


def format_quiz_header(state: QuizState) -> str:
    quiz = state.course.quiz
    return (
        f"## {state.course.title} Quiz\n\n"
        f"{len(quiz.questions)} question(s). You need {quiz.pass_mark}% to earn a certificate."
    )


def format_result(state: CertificateState) -> str:
    """Format the score, verdict and per-question review"""
    score = state.score
    if score.passed:
        headline = f"### Congratulations! You passed with {score.percentage}%."
        hint = "Enter your name below to download your certificate."
    else:
        headline = f"### Sorry, you scored {score.percentage}%. Please try again."
        hint = f"The pass mark for {state.course.title} is {state.course.quiz.pass_mark}%."

    rows = []
    for idx, item in enumerate(state.review, start=1):
        mark = "✅" if item.is_correct else "❌"
        chosen = item.chosen if item.chosen is not None else "_(no answer)_"
        rows.append(f"| {idx} | {item.prompt} | {chosen} | {item.correct} | {mark} |")

    table = ""
    if rows:
        table = (
            "\n\n| # | Question | Your answer | Correct answer | |\n"
            "|---|---|---|---|---|\n" + "\n".join(rows)
        )
    return f"## Certificate\n\n{headline}\n\n{hint}{table}"


def render(controller: SessionController, question_slots: int) -> List[Any]:
    """Component updates for the current screen.

    Order: home, course, quiz and certificate columns, course content, quiz
    header, one radio per question slot, result text, name field, download
    button, certificate file.
    """
    state = controller.state
    screens = [
        gr.update(visible=isinstance(state, HomeState)),
        gr.update(visible=isinstance(state, CourseDetailState)),
        gr.update(visible=isinstance(state, QuizState)),
        gr.update(visible=isinstance(state, CertificateState)),
    ]

    course_md = format_course_content(state) if isinstance(state, CourseDetailState) else ""

    if isinstance(state, QuizState):
        quiz_header = format_quiz_header(state)
        questions = state.course.quiz.questions
        radios = []
        for idx in range(question_slots):
            if idx < len(questions):
                question = questions[idx]
                selection = state.attempt.selections[idx]
                radios.append(gr.update(
                    visible=True,
                    label=f"{idx + 1}. {question.prompt}",
                    choices=list(question.options),
                    value=question.options[selection] if selection is not None else None,
                ))
            else:
                radios.append(gr.update(visible=False, choices=[], value=None))
    else:
        quiz_header = ""
        radios = [gr.update(visible=False, choices=[], value=None) for _ in range(question_slots)]

    if isinstance(state, CertificateState):
        passed = state.score.passed
        result_md = format_result(state)
        name_input = gr.update(visible=passed, value=state.learner_name)
        download_btn = gr.update(visible=passed)
    else:
        result_md = ""
        name_input = gr.update(visible=False, value="")
        download_btn = gr.update(visible=False)
    cert_file = gr.update(visible=False, value=None)

    return screens + [course_md, quiz_header] + radios + [result_md, name_input, download_btn, cert_file]


def _transition(controller: SessionController, action, *args):
    try:
        action(*args)
    except AcademyError as e:
        logger.error(f"Rejected transition on the {controller.screen} screen: {str(e)}", exc_info=True)
        raise gr.Error(str(e))


def on_select_course(controller: SessionController, course_id: str, question_slots: int) -> Tuple:
    _transition(controller, controller.select_course, course_id)
    return (controller, *render(controller, question_slots))


def on_take_quiz(controller: SessionController, question_slots: int) -> Tuple:
    _transition(controller, controller.request_quiz)
    return (controller, *render(controller, question_slots))


def on_select_answer(controller: SessionController, question_index: int, choice: Optional[int]) -> SessionController:
    if choice is None:
        return controller
    _transition(controller, controller.select_answer, question_index, choice)
    return controller


def on_submit(controller: SessionController, question_slots: int) -> Tuple:
    if isinstance(controller.state, QuizState):
        unanswered = len(controller.state.attempt.selections) - controller.state.attempt.answered
        if unanswered:
            gr.Info(f"{unanswered} question(s) left unanswered were marked incorrect.")
    _transition(controller, controller.submit)
    return (controller, *render(controller, question_slots))


def on_name_change(controller: SessionController, name: str) -> SessionController:
    if isinstance(controller.state, CertificateState) and controller.state.score.passed:
        controller.set_learner_name(name or "")
    return controller


def on_download(controller: SessionController, name: str, issuer: CertificateIssuer) -> Tuple:
    """Render the certificate; a rendering failure is shown as a retryable warning"""
    on_name_change(controller, name)
    try:
        file_path = controller.issue_certificate(issuer)
    except RenderingFailure as e:
        gr.Warning(f"{str(e)}. Please try again.")
        return controller, gr.update(visible=False, value=None)
    except AcademyError as e:
        logger.error(f"Certificate request rejected: {str(e)}", exc_info=True)
        raise gr.Error(str(e))
    return controller, gr.update(visible=True, value=str(file_path))


def on_go_home(controller: SessionController, question_slots: int) -> Tuple:
    controller.go_home()
    return (controller, *render(controller, question_slots))


def create_interface(catalog: CourseCatalog, issuer: CertificateIssuer):
    """Create the Gradio interface with one screen per session state"""
    question_slots = max(len(course.quiz.questions) for course in catalog)

    with gr.Blocks(title=config.ACADEMY_NAME) as app:
        gr.Markdown(f"# 🎓 {config.ACADEMY_NAME}")

        session = gr.State(lambda: SessionController(catalog))

        with gr.Column(visible=True) as home_col:
            gr.Markdown("## Available Courses")
            course_buttons = []
            for course in catalog:
                with gr.Group():
                    btn = gr.Button(course.title, variant="primary")
                    gr.Markdown(course.description)
                course_buttons.append((course.id, btn))

        with gr.Column(visible=False) as course_col:
            course_output = gr.Markdown()
            take_quiz_btn = gr.Button("Take Quiz", variant="primary")
            course_home_btn = gr.Button("Back to Home")

        with gr.Column(visible=False) as quiz_col:
            quiz_header = gr.Markdown()
            radios = [
                gr.Radio(choices=[], type="index", visible=False, interactive=True)
                for _ in range(question_slots)
            ]
            submit_btn = gr.Button("Submit", variant="primary")
            quiz_home_btn = gr.Button("Back to Home")

        with gr.Column(visible=False) as cert_col:
            result_output = gr.Markdown()
            name_input = gr.Textbox(label="Your Name", placeholder="Enter your name", visible=False)
            download_btn = gr.Button("Download Certificate", variant="primary", visible=False)
            cert_file = gr.File(label="Certificate", visible=False, interactive=False)
            cert_home_btn = gr.Button("Back to Home")

        screen_outputs = [
            session, home_col, course_col, quiz_col, cert_col,
            course_output, quiz_header, *radios,
            result_output, name_input, download_btn, cert_file,
        ]

        # Event handlers
        for course_id, btn in course_buttons:
            btn.click(
                fn=lambda controller, course_id=course_id: on_select_course(controller, course_id, question_slots),
                inputs=[session],
                outputs=screen_outputs
            )

        take_quiz_btn.click(
            fn=lambda controller: on_take_quiz(controller, question_slots),
            inputs=[session],
            outputs=screen_outputs
        )

        for idx, radio in enumerate(radios):
            radio.input(
                fn=lambda controller, choice, idx=idx: on_select_answer(controller, idx, choice),
                inputs=[session, radio],
                outputs=[session]
            )

        submit_btn.click(
            fn=lambda controller: on_submit(controller, question_slots),
            inputs=[session],
            outputs=screen_outputs
        )

        name_input.input(
            fn=on_name_change,
            inputs=[session, name_input],
            outputs=[session]
        )

        download_btn.click(
            fn=lambda controller, name: on_download(controller, name, issuer),
            inputs=[session, name_input],
            outputs=[session, cert_file]
        )

        for home_btn in (course_home_btn, quiz_home_btn, cert_home_btn):
            home_btn.click(
                fn=lambda controller: on_go_home(controller, question_slots),
                inputs=[session],
                outputs=screen_outputs
            )

    return app


if __name__ == "__main__":
    catalog = CourseCatalog.load(config.CATALOG_PATH)
    issuer = CertificateIssuer(config.CERTIFICATE_DIR, config.ACADEMY_NAME)
    app = create_interface(catalog, issuer)
    app.queue()
    app.launch(
        server_name=config.SERVER_NAME,
        server_port=config.SERVER_PORT,
        allowed_paths=[str(config.CERTIFICATE_DIR)],
        show_error=True
    )
