from wokkibot.trivia_state import Trivia, TriviaManager, TriviaQuestion


def test_question_from_dict():
    data = {
        "type": "multiple",
        "difficulty": "easy",
        "category": "General Knowledge",
        "question": "Which planet is red?",
        "correct_answer": "Mars",
        "incorrect_answers": ["Venus", "Jupiter", "Saturn"],
    }
    question = TriviaQuestion.from_dict(data)
    assert question.type == "multiple"
    assert question.correct_answer == "Mars"
    assert question.incorrect_answers == ["Venus", "Jupiter", "Saturn"]


def test_question_from_dict_missing_answers():
    question = TriviaQuestion.from_dict({"question": "q"})
    assert question.incorrect_answers == []
    assert question.correct_answer == ""


def test_manager_returns_same_state_per_guild():
    manager = TriviaManager()
    first = manager.get(1)
    assert first.is_active is False
    first.set_status(True)
    assert manager.get(1) is first
    assert manager.get(1).is_active is True


def test_manager_separates_guilds():
    manager = TriviaManager()
    manager.get(1).set_status(True)
    assert manager.get(2).is_active is False
    assert manager.get(1) is not manager.get(2)


def test_set_status_toggles():
    trivia = Trivia()
    trivia.set_status(True)
    trivia.set_status(False)
    assert trivia.is_active is False