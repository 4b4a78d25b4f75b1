'''
LowkeyType - terminal typing-speed trainer
==========================================

Modes
-----
- Endurance: 10-word rounds that keep coming while accuracy stays >= 85% and
  speed stays >= 30 WPM. The starting word list follows your history.
- Raw Speed: a single 15-50 word test on the word list you pick.

Modules: scoring, session, difficulty, endurance, speed_test (core);
profile, store, words, terminal, reports, cli (supporting).
'''

__version__ = "1.0.0"
