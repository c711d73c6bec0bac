"""LangGraph workflow and state management."""

# Note: Avoid importing workflow here to prevent circular imports
# Import directly from modules as needed:
# from quizform.graph.state import QuizState, create_initial_state
# from quizform.graph.workflow import compile_workflow, generate_quiz_questions
