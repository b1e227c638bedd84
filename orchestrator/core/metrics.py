"""Prometheus metrics for the orchestration core."""

from prometheus_client import Counter, Gauge

# Job processing metrics
JOBS_ENQUEUED = Counter(
    "orchestrator_jobs_enqueued_total",
    "Total number of jobs accepted by the queue",
    ["job_type"],
)

JOBS_FINISHED = Counter(
    "orchestrator_jobs_finished_total",
    "Total number of jobs that reached a terminal status",
    ["job_type", "status"],  # completed, failed, canceled
)

JOB_ATTEMPTS = Counter(
    "orchestrator_job_attempts_total",
    "Total number of handler invocations",
    ["job_type"],
)

QUEUE_SIZE = Gauge(
    "orchestrator_queue_size",
    "Current number of jobs waiting in the queue",
)

# Prompt metrics
PROMPT_RENDERS = Counter(
    "orchestrator_prompt_renders_total",
    "Total number of rendered prompts",
    ["template", "variant"],
)

# Routing metrics
DISPATCHES = Counter(
    "orchestrator_dispatch_total",
    "Total number of generation requests routed to a provider",
    ["provider"],
)
