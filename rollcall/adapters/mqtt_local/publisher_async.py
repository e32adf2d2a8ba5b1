"""
Local MQTT publisher adapter for the roll-call service.

This module implements the local MQTT publisher adapter
with outbox pattern for durable message delivery.
"""

import asyncio
import json
from typing import Optional
from aiomqtt import Client, MqttError, Will
from rollcall.adapters.storage.sqlite_outbox import SQLiteOutbox
from rollcall.common.retry import backoff_delay
from rollcall.observability import metrics
from rollcall.observability.logging_setup import get_logger

log = get_logger("rollcall.mqtt_local")

class LocalMqttPublisher:
    """로컬 MQTT 발송 어댑터 (Outbox 패턴)"""
    
    def __init__(self, 
                 *,
                 broker_host: str,
                 broker_port: int,
                 topic_prefix: str,
                 outbox: SQLiteOutbox,
                 username: str | None = None,
                 password: str | None = None,
                 tls: bool = False,
                 client_id: str | None = None,
                 keepalive: int = 30,
                 lwt_topic: str = "rollcall/state",
                 qos_default: int = 1,
                 retain_default: bool = False,
                 backoff_initial: float = 0.5,
                 backoff_max: float = 30.0,
                 max_retries: int = 10,
                 poll_interval: float = 1.0):
        """
        초기화합니다.
        
        Args:
            broker_host: MQTT 브로커 호스트
            broker_port: MQTT 브로커 포트
            topic_prefix: 토픽 접두사
            outbox: Outbox 인스턴스
            username: 사용자명
            password: 비밀번호
            tls: TLS 사용 여부
            client_id: 클라이언트 ID
            keepalive: keepalive 시간
            lwt_topic: Last Will and Testament 토픽
            qos_default: 기본 QoS
            retain_default: 기본 retain 플래그
            backoff_initial: 초기 백오프 시간
            backoff_max: 최대 백오프 시간
            max_retries: 항목별 최대 재시도 횟수
            poll_interval: Outbox 가 비었을 때 대기 시간
        """
        self.broker_host = broker_host
        self.broker_port = broker_port
        self.topic_prefix = topic_prefix.rstrip("/")
        self.outbox = outbox
        self.username = username
        self.password = password
        self.tls = tls
        self.client_id = client_id
        self.keepalive = keepalive
        self.lwt_topic = lwt_topic
        self.qos_default = qos_default
        self.retain_default = retain_default
        self.backoff_initial = backoff_initial
        self.backoff_max = backoff_max
        self.max_retries = max_retries
        self.poll_interval = poll_interval
        
        self._running = False
    
    def _client(self) -> Client:
        kwargs = {
            "hostname": self.broker_host,
            "port": self.broker_port,
            "keepalive": self.keepalive,
            "username": self.username,
            "password": self.password,
            "identifier": self.client_id,
            "will": Will(self.lwt_topic, "offline", qos=1, retain=True),
        }
        if self.tls:
            from aiomqtt import TLSParameters
            kwargs["tls_params"] = TLSParameters()
        return Client(**kwargs)
    
    async def start(self) -> None:
        """발송 워커를 시작합니다. 연결이 끊기면 백오프 후 재연결합니다."""
        self._running = True
        attempt = 0
        
        while self._running:
            try:
                async with self._client() as client:
                    attempt = 0
                    await client.publish(self.lwt_topic, "online", qos=1, retain=True)
                    log.info(f"로컬 MQTT 브로커 연결됨: {self.broker_host}:{self.broker_port}")
                    
                    while self._running:
                        sent = await self.drain_once(client)
                        if not sent:
                            await asyncio.sleep(self.poll_interval)
            except MqttError as e:
                attempt += 1
                delay = backoff_delay(attempt, self.backoff_initial, self.backoff_max)
                log.warning(f"로컬 MQTT 연결 끊김, {delay:.1f}초 후 재연결 error:{e}")
                await asyncio.sleep(delay)
    
    async def drain_once(self, client: Client) -> bool:
        """
        Outbox 의 가장 오래된 메시지 하나를 발송합니다.
        
        Returns:
            처리할 항목이 있었는지 여부
        """
        item = await self.outbox.peek_oldest()
        if not item:
            return False
        
        # 최대 재시도 횟수 확인
        if item.attempts >= self.max_retries:
            log.warning(f"최대 재시도 횟수 초과, 항목 삭제: {item.id} topic:{item.topic}")
            await self.outbox.delete(item.id)
            return True
        
        try:
            await client.publish(item.topic, item.payload, qos=item.qos, retain=item.retain)
        except MqttError as e:
            log.error(f"메시지 발송 실패: id:{item.id} topic:{item.topic} error:{e}")
            await self.outbox.mark_attempt(item.id)
            metrics.publish_retries.labels(topic=item.topic).inc()
            raise
        
        await self.outbox.delete(item.id)
        metrics.outbox_size.set(await self.outbox.get_count())
        log.info(f"메시지 발송 성공: id:{item.id} topic:{item.topic}")
        return True
    
    async def enqueue_json(self, topic_suffix: str, payload_obj: dict, 
                           qos: Optional[int] = None, retain: Optional[bool] = None) -> int:
        """
        JSON 객체를 Outbox에 추가합니다.
        
        Args:
            topic_suffix: 토픽 접미사
            payload_obj: 발송할 JSON 객체
            qos: QoS 레벨 (None이면 기본값 사용)
            retain: retain 플래그 (None이면 기본값 사용)
            
        Returns:
            생성된 Outbox 항목의 ID
        """
        topic = f"{self.topic_prefix}/{topic_suffix}"
        payload = json.dumps(payload_obj, ensure_ascii=False).encode('utf-8')
        
        oid = await self.outbox.enqueue(
            topic,
            payload,
            self.qos_default if qos is None else qos,
            self.retain_default if retain is None else retain
        )
        metrics.outbox_size.set(await self.outbox.get_count())
        return oid
    
    async def clear_retained(self, topic_suffix: str) -> int:
        """
        토픽의 retain 메시지를 지웁니다 (빈 페이로드 retain 발송).
        
        Returns:
            생성된 Outbox 항목의 ID
        """
        oid = await self.outbox.enqueue(f"{self.topic_prefix}/{topic_suffix}", b"", self.qos_default, True)
        metrics.outbox_size.set(await self.outbox.get_count())
        return oid
    
    def stop(self) -> None:
        """발송 루프를 멈춥니다 (현재 연결은 루프 종료 시 닫힘)."""
        self._running = False
