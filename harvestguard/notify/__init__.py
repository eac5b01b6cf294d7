"""Notify module."""
from harvestguard.notify.channels import LogChannel, SmsLogChannel, ToastLogChannel
from harvestguard.notify.dispatcher import DispatchService, NotificationDispatcher
from harvestguard.notify.queue import OfflineQueue, SyncQueue
from harvestguard.notify.scheduler import TimerScheduler
from harvestguard.notify.session import FarmerSession, NotifiedSet, SessionRegistry
from harvestguard.notify.sync import SyncService
