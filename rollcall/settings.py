# rollcall/settings.py
from __future__ import annotations
from pydantic import BaseModel, Field

class DirectoryConfig(BaseModel):
    source: str = "file"                      # file | http
    file_path: str = "/share/personnel.csv"
    url: str = ""
    token: str = ""
    timeout_sec: int = 5
    max_retries: int = 2
    backoff_initial_sec: float = 0.5
    backoff_max_sec: float = 5.0

class TimerConfig(BaseModel):
    tick_interval_sec: float = 1.0

class LocalMQTT(BaseModel):
    enabled: bool = False
    host: str = "core-mosquitto"
    port: int = 1883
    username: str | None = None
    password: str | None = None
    tls: bool = False
    client_id: str | None = None
    keepalive: int = 30
    topic_prefix: str = "rollcall"
    lwt_topic: str = "rollcall/state"
    qos: int = 1
    retain: bool = False

class HAConfig(BaseModel):
    enabled: bool = False
    base_url: str = "http://supervisor/core"
    token: str = ""
    timeout_sec: int = 5
    notify_services: list[str] = Field(default_factory=list)   # 비어 있으면 mobile_app_* 전체

class HistoryConfig(BaseModel):
    enabled: bool = True
    db_path: str = "/data/rollcall_history.db"

class Reliability(BaseModel):
    outbox_path: str = "/data/outbox.db"
    publish_max_retries: int = 10
    backoff_initial_sec: float = 0.5
    backoff_max_sec: float = 30.0

class Observability(BaseModel):
    http_port: int = 8099
    metrics_enabled: bool = True
    service_name: str = "RollCall"
    build_version: str = "0.2.0"
    build_date: str = "2026-10-01"
    log_level: str = "INFO"
    log_json: bool = False

class Settings(BaseModel):
    directory: DirectoryConfig = Field(default_factory=DirectoryConfig)
    timer: TimerConfig = Field(default_factory=TimerConfig)
    local_mqtt: LocalMQTT = Field(default_factory=LocalMQTT)
    ha: HAConfig = Field(default_factory=HAConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    reliability: Reliability = Field(default_factory=Reliability)
    observability: Observability = Field(default_factory=Observability)
