# rollcall/main.py
import os, asyncio, signal
from typing import List, Optional
import uvicorn
from rollcall.settings import Settings
from rollcall.observability.health import create_app
from rollcall.observability.logging_setup import setup_logger, get_logger
from rollcall.adapters.directory import FileDirectory, HttpDirectory
from rollcall.adapters.homeassistant.client import HAClient
from rollcall.adapters.mqtt_local.publisher_async import LocalMqttPublisher
from rollcall.adapters.notify import FanoutNotifier, HomeAssistantNotifier, LoggingNotifier, MqttNotifier
from rollcall.adapters.scheduler import AsyncioScheduler
from rollcall.adapters.storage import SQLiteHistoryStore, SQLiteOutbox
from rollcall.orchestrators import RollCallOrchestrator, RosterLoader
from rollcall.ports.directory import PersonnelDirectoryPort
from rollcall.ports.notify import NotificationSinkPort

def _b(name, default=False): return os.getenv(name, str(default)).lower() in ("1","true","yes","on")

def build_settings() -> Settings:
    s = Settings()

    # 인원 디렉터리
    s.directory.source = os.getenv("DIRECTORY_SOURCE", s.directory.source)
    s.directory.file_path = os.getenv("DIRECTORY_FILE", s.directory.file_path)
    s.directory.url = os.getenv("DIRECTORY_URL", s.directory.url)
    s.directory.token = os.getenv("DIRECTORY_TOKEN", s.directory.token)
    s.directory.timeout_sec = int(os.getenv("DIRECTORY_TIMEOUT_SEC", s.directory.timeout_sec))
    s.directory.max_retries = int(os.getenv("DIRECTORY_MAX_RETRIES", s.directory.max_retries))

    # 타이머
    s.timer.tick_interval_sec = float(os.getenv("TICK_INTERVAL_SEC", s.timer.tick_interval_sec))

    # LOCAL MQTT
    s.local_mqtt.enabled = _b("LOCAL_MQTT_ENABLED", s.local_mqtt.enabled)
    s.local_mqtt.host = os.getenv("LOCAL_MQTT_HOST", s.local_mqtt.host)
    s.local_mqtt.port = int(os.getenv("LOCAL_MQTT_PORT", s.local_mqtt.port))
    s.local_mqtt.username = os.getenv("LOCAL_MQTT_USERNAME", s.local_mqtt.username)
    s.local_mqtt.password = os.getenv("LOCAL_MQTT_PASSWORD", s.local_mqtt.password)
    s.local_mqtt.tls = _b("LOCAL_MQTT_TLS", s.local_mqtt.tls)
    s.local_mqtt.topic_prefix = os.getenv("LOCAL_TOPIC_PREFIX", s.local_mqtt.topic_prefix)

    # HA
    s.ha.enabled = _b("HA_NOTIFY_ENABLED", s.ha.enabled)
    s.ha.base_url = os.getenv("HA_BASE_URL", s.ha.base_url)
    s.ha.token = os.getenv("HA_TOKEN", s.ha.token)
    services = os.getenv("HA_NOTIFY_SERVICES")
    if services:
        s.ha.notify_services = [x.strip() for x in services.split(",") if x.strip()]

    # 이력
    s.history.enabled = _b("HISTORY_ENABLED", s.history.enabled)
    s.history.db_path = os.getenv("HISTORY_DB_PATH", s.history.db_path)

    # 신뢰성
    s.reliability.outbox_path = os.getenv("OUTBOX_PATH", s.reliability.outbox_path)

    # 관측성
    s.observability.metrics_enabled = _b("METRICS_ENABLED", s.observability.metrics_enabled)
    s.observability.http_port = int(os.getenv("METRICS_PORT", s.observability.http_port))
    s.observability.log_level = os.getenv("LOG_LEVEL", s.observability.log_level)
    s.observability.log_json = _b("LOG_JSON", s.observability.log_json)

    return s

def build_directory(s: Settings) -> PersonnelDirectoryPort:
    source = s.directory.source.lower()
    if source == "file":
        return FileDirectory(s.directory.file_path)
    if source == "http":
        if not s.directory.url:
            raise ValueError("DIRECTORY_URL is required for the http directory source")
        return HttpDirectory(s.directory.url, s.directory.token, s.directory.timeout_sec)
    raise ValueError(f"unknown directory source: {s.directory.source}")

async def main():
    s = build_settings()
    setup_logger(level=s.observability.log_level, json=s.observability.log_json)
    log = get_logger()
    log.info("설정 로드 완료")

    roster_loader = RosterLoader(
        build_directory(s),
        max_retries=s.directory.max_retries,
        backoff_initial=s.directory.backoff_initial_sec,
        backoff_max=s.directory.backoff_max_sec,
    )

    sinks: List[NotificationSinkPort] = [LoggingNotifier()]
    publisher: Optional[LocalMqttPublisher] = None
    if s.local_mqtt.enabled:
        outbox = SQLiteOutbox(s.reliability.outbox_path); await outbox.init()
        publisher = LocalMqttPublisher(
            broker_host=s.local_mqtt.host,
            broker_port=s.local_mqtt.port,
            topic_prefix=s.local_mqtt.topic_prefix,
            outbox=outbox,
            username=s.local_mqtt.username,
            password=s.local_mqtt.password,
            tls=s.local_mqtt.tls,
            client_id=s.local_mqtt.client_id,
            keepalive=s.local_mqtt.keepalive,
            lwt_topic=s.local_mqtt.lwt_topic,
            qos_default=s.local_mqtt.qos,
            retain_default=s.local_mqtt.retain,
            backoff_initial=s.reliability.backoff_initial_sec,
            backoff_max=s.reliability.backoff_max_sec,
            max_retries=s.reliability.publish_max_retries,
        )
        sinks.append(MqttNotifier(publisher))
        log.info("로컬 MQTT 알림 활성화")
    if s.ha.enabled:
        def ha_client() -> HAClient:
            return HAClient(base_url=s.ha.base_url, token=s.ha.token, timeout=s.ha.timeout_sec)
        sinks.append(HomeAssistantNotifier(ha_client, s.ha.notify_services))
        log.info("Home Assistant 알림 활성화")

    history: Optional[SQLiteHistoryStore] = None
    if s.history.enabled:
        history = SQLiteHistoryStore(s.history.db_path); await history.init()

    orch = RollCallOrchestrator(
        roster_loader,
        AsyncioScheduler(),
        notifier=FanoutNotifier(sinks),
        history=history,
        tick_interval_sec=s.timer.tick_interval_sec,
    )
    log.info("오케스트레이터 생성 완료")

    app = create_app(s, orch, history)
    server = uvicorn.Server(uvicorn.Config(
        app, host="0.0.0.0", port=s.observability.http_port,
        log_level=s.observability.log_level.lower()
    ))
    http_task = asyncio.create_task(server.serve())
    pub_task = asyncio.create_task(publisher.start()) if publisher else None
    log.info(f"HTTP 서버 시작됨 port:{s.observability.http_port}")

    stop = asyncio.Future()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        try: loop.add_signal_handler(sig, lambda: (not stop.done()) and stop.set_result(True))
        except NotImplementedError: pass

    await stop
    log.info("종료 신호 수신")
    orch.shutdown()
    server.should_exit = True
    if publisher: publisher.stop()
    if pub_task: pub_task.cancel()
    await asyncio.gather(http_task, *( [pub_task] if pub_task else [] ), return_exceptions=True)

def run():
    asyncio.run(main())

if __name__ == "__main__":
    run()
