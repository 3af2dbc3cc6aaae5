import pytest
from models import Completion
from errors import ValidationError, NotFoundError, ConflictError
from services import completion_service

def test_toggle_completion(make_habit):
    h1 = make_habit("Run")

    assert completion_service.toggle_completion(h1.id, "2024-01-10") is True
    assert completion_service.get_completions_for_date("2024-01-10") == {h1.id}

    assert completion_service.toggle_completion(h1.id, "2024-01-10") is False
    assert completion_service.get_completions_for_date("2024-01-10") == set()

def test_toggle_is_involution(make_habit):
    h1 = make_habit("Run")
    h2 = make_habit("Read")
    completion_service.toggle_completion(h2.id, "2024-03-01")
    before = completion_service.get_completions_for_date("2024-03-01")

    for habit in (h1, h2):
        completion_service.toggle_completion(habit.id, "2024-03-01")
        completion_service.toggle_completion(habit.id, "2024-03-01")
        assert completion_service.get_completions_for_date("2024-03-01") == before

def test_toggle_only_touches_one_day(make_habit):
    habit = make_habit()
    completion_service.toggle_completion(habit.id, "2024-01-10")
    assert completion_service.get_completions_for_date("2024-01-11") == set()
    assert completion_service.get_all_completions() == {"2024-01-10": {habit.id}}

def test_toggle_unknown_habit(app):
    with pytest.raises(NotFoundError):
        completion_service.toggle_completion('missing', "2024-01-10")
    assert Completion.query.count() == 0

@pytest.mark.parametrize('bad_date', ['2024-1-10', '2024-13-01', 'yesterday', '', None])
def test_toggle_bad_date(make_habit, bad_date):
    habit = make_habit()
    with pytest.raises(ValidationError):
        completion_service.toggle_completion(habit.id, bad_date)

def test_uniqueness_after_many_toggles(make_habit):
    habits = [make_habit(f"Habit {i}") for i in range(3)]
    for i in range(25):
        habit = habits[i % 3]
        completion_service.toggle_completion(habit.id, f"2024-02-0{1 + i % 4}")

    pairs = [(c.date, c.habit_id) for c in Completion.query.all()]
    assert len(pairs) == len(set(pairs))

def test_conflicting_insert_raises_conflict(make_habit, monkeypatch):
    habit = make_habit()
    completion_service.toggle_completion(habit.id, "2024-01-10")

    # Simulate a writer whose read missed the row another writer just created
    monkeypatch.setattr(completion_service, '_find_completion', lambda habit_id, date_key: None)
    with pytest.raises(ConflictError):
        completion_service.toggle_completion(habit.id, "2024-01-10")

    assert Completion.query.filter_by(habit_id=habit.id, date="2024-01-10").count() == 1

def test_cascade_delete_with_no_completions(make_habit):
    habit = make_habit()
    assert completion_service.cascade_delete_for_habit(habit.id) == 0

def test_api_toggle(client, make_habit):
    habit = make_habit()
    response = client.post(f'/api/habits/{habit.id}/toggle?date=2024-01-10')
    assert response.status_code == 200
    assert response.json == {'status': 'success', 'completed': True, 'date': '2024-01-10'}

    response = client.post(f'/api/habits/{habit.id}/toggle?date=2024-01-10')
    assert response.json['completed'] is False

def test_api_toggle_defaults_to_today(client, make_habit):
    from utils import today_key
    habit = make_habit()
    response = client.post(f'/api/habits/{habit.id}/toggle')
    assert response.json['date'] == today_key()
    assert completion_service.get_completions_for_date(today_key()) == {habit.id}

def test_api_toggle_conflict_is_not_an_error(client, make_habit, monkeypatch):
    habit = make_habit()
    client.post(f'/api/habits/{habit.id}/toggle?date=2024-01-10')

    monkeypatch.setattr(completion_service, '_find_completion', lambda habit_id, date_key: None)
    response = client.post(f'/api/habits/{habit.id}/toggle?date=2024-01-10')
    assert response.status_code == 200
    assert response.json['completed'] is True

def test_api_toggle_errors(client, make_habit):
    response = client.post('/api/habits/missing/toggle?date=2024-01-10')
    assert response.status_code == 404

    habit = make_habit()
    response = client.post(f'/api/habits/{habit.id}/toggle?date=10-01-2024')
    assert response.status_code == 400
    assert response.json['error'] == 'validation'

def test_api_completions(client, make_habit):
    habit = make_habit()
    client.post(f'/api/habits/{habit.id}/toggle?date=2024-01-10')

    response = client.get('/api/completions?date=2024-01-10')
    assert response.json['habit_ids'] == [habit.id]

    response = client.get('/api/completions')
    assert response.json['completionData'] == {'2024-01-10': [habit.id]}

def test_api_toggle_on_vanished_habit_is_not_found(client, make_habit, monkeypatch):
    from services import habit_service
    habit_id = make_habit().id

    def delete_then_fail(habit_id, date_key):
        # The habit disappears between the existence check and the commit
        habit_service.delete_habit(habit_id)
        raise ConflictError("foreign key failed")

    monkeypatch.setattr(completion_service, 'toggle_completion', delete_then_fail)
    response = client.post(f'/api/habits/{habit_id}/toggle?date=2024-01-10')
    assert response.status_code == 404
    assert response.json['error'] == 'not_found'
