"""Chat bot building blocks: config, trivia checking, minesweeper, queues, downloads and OAuth."""

__version__ = "0.1.0"