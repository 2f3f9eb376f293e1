import os

# main.py のモジュールレベルで load_app_config() が呼ばれ、全テストで同じストアを共有するため、
# セッション数上限に達しないよう十分大きな値を設定しておく。
os.environ.setdefault("LUPUS_MAX_SESSIONS", "10000")
