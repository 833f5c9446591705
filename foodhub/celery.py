import os
import json
import sys
from decimal import Decimal
from celery import Celery
from kombu.serialization import register
from kombu.utils.json import JSONEncoder

# --- Django settings module ---
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "foodhub.settings")

# --- Define Celery app ---
app = Celery("foodhub")

# --- Override for test mode BEFORE loading Django settings ---
is_test = (os.environ.get('PYTEST_CURRENT_TEST') or
           'pytest' in sys.modules or
           any('pytest' in arg for arg in sys.argv))

if is_test:
    app.conf.task_always_eager = True
    app.conf.task_eager_propagates = True

app.config_from_object("django.conf:settings", namespace="CELERY")

# Re-apply test mode after Django config to ensure it takes precedence
if is_test:
    app.conf.task_always_eager = True
    app.conf.task_eager_propagates = True


# --- JSON encoder that understands Decimal prices ---
class ExtendedJSONEncoder(JSONEncoder):
    def default(self, o):
        if isinstance(o, Decimal):
            return str(o)
        return super().default(o)


register(
    "custom_json",
    lambda obj: json.dumps(obj, cls=ExtendedJSONEncoder),
    json.loads,
    content_type="application/x-custom-json",
    content_encoding="utf-8",
)

app.conf.task_serializer = "custom_json"
app.conf.result_serializer = "custom_json"
app.conf.accept_content = ["custom_json", "json"]

# --- Auto-discover tasks ---
app.autodiscover_tasks()
