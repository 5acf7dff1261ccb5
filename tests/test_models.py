from datetime import datetime, timezone

from wokkibot.models import STATISTIC_NAMES, Command, Guild, Reminder, Statistics


def test_reminder_from_mapping_converts_snowflakes():
    when = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    reminder = Reminder.from_row(
        {
            "id": 7,
            "user_id": "111",
            "channel_id": "222",
            "guild_id": "333",
            "message": "stretch",
            "remind_at": when.isoformat(),
        }
    )
    assert reminder.id == 7
    assert reminder.user_id == 111
    assert reminder.channel_id == 222
    assert reminder.guild_id == 333
    assert reminder.message == "stretch"
    assert reminder.remind_at == when


def test_reminder_from_row_without_guild_defaults_to_zero():
    when = datetime(2024, 1, 2, 3, 4, 5)
    reminder = Reminder.from_row(
        {"id": 1, "user_id": 5, "channel_id": 6, "message": "m", "remind_at": when}
    )
    assert reminder.guild_id == 0
    assert reminder.remind_at == when


def test_statistics_from_row_ignores_unknown_keys():
    row = {name: index for index, name in enumerate(STATISTIC_NAMES)}
    row["other"] = 99
    stats = Statistics.from_row(row)
    for index, name in enumerate(STATISTIC_NAMES):
        assert getattr(stats, name) == index


def test_statistics_defaults_are_zero():
    stats = Statistics()
    assert all(getattr(stats, name) == 0 for name in STATISTIC_NAMES)


def test_command_and_guild_fields():
    command = Command("hello", "!", "greets", "hi", 10, 20)
    assert (command.prefix, command.name, command.guild_id) == ("!", "hello", 20)
    guild = Guild(id=5)
    assert guild.pin_channel == 0
    assert guild.convert_x_links is True