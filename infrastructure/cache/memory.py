# infrastructure/cache/memory.py
"""Diário em memória dos negócios executados."""
from collections import deque
from typing import Deque, Dict, List, Optional
import threading
import logging

from core.contracts.messaging import IMarketEventBus
from core.entities.trade import TradeReceipt
from core.types.market import JournalStats, MarketEvent

logger = logging.getLogger(__name__)


class TradeJournal:
    """
    Guarda os últimos comprovantes de negócio publicados pelas bolsas.
    Thread-safe; os contadores agregados cobrem todo o histórico, não só a janela.
    """

    __slots__ = ['max_size', 'receipts', 'lock', 'stats', 'by_exchange']

    def __init__(self, max_size: int = 10000):
        """
        Args:
            max_size: Quantidade máxima de comprovantes mantidos em memória
        """
        self.max_size = max_size
        self.receipts: Deque[TradeReceipt] = deque(maxlen=max_size)
        self.lock = threading.RLock()

        self.stats = {
            'total_trades': 0,
            'buys': 0,
            'sells': 0,
            'shares_traded': 0,
            'turnover': 0
        }
        self.by_exchange: Dict[str, int] = {}

        logger.debug(f"TradeJournal inicializado com max_size={max_size}")

    def attach(self, event_bus: IMarketEventBus) -> None:
        """Inscreve o diário no evento TRADE_EXECUTED."""
        event_bus.subscribe(MarketEvent.TRADE_EXECUTED.value, self.record)

    def detach(self, event_bus: IMarketEventBus) -> None:
        event_bus.unsubscribe(MarketEvent.TRADE_EXECUTED.value, self.record)

    def record(self, receipt: TradeReceipt) -> None:
        """Registra um comprovante."""
        with self.lock:
            self.receipts.append(receipt)
            self.stats['total_trades'] += 1
            self.stats['buys' if receipt.is_buy else 'sells'] += 1
            self.stats['shares_traded'] += receipt.quantity
            self.stats['turnover'] += receipt.amount
            self.by_exchange[receipt.exchange] = self.by_exchange.get(receipt.exchange, 0) + 1

            if self.stats['total_trades'] % 1000 == 0:
                logger.debug(f"TradeJournal: {self.stats['total_trades']} negócios registrados")

    def recent(self, count: int) -> List[TradeReceipt]:
        """Os `count` comprovantes mais recentes, em ordem cronológica."""
        with self.lock:
            all_receipts = list(self.receipts)
        if count <= 0:
            return []
        return all_receipts[-count:]

    def all(self) -> List[TradeReceipt]:
        with self.lock:
            return list(self.receipts)

    def for_operator(self, operator: str) -> List[TradeReceipt]:
        with self.lock:
            return [r for r in self.receipts if r.operator == operator]

    def for_listing(self, exchange: str, company: str) -> List[TradeReceipt]:
        with self.lock:
            return [r for r in self.receipts if r.exchange == exchange and r.company == company]

    def last_price(self, exchange: str, company: str) -> Optional[int]:
        """Preço pós-ajuste do último negócio da cotação, se houver."""
        with self.lock:
            for receipt in reversed(self.receipts):
                if receipt.exchange == exchange and receipt.company == company:
                    return receipt.new_price
        return None

    def get_stats(self) -> JournalStats:
        with self.lock:
            return {
                'total_trades': self.stats['total_trades'],
                'buys': self.stats['buys'],
                'sells': self.stats['sells'],
                'shares_traded': self.stats['shares_traded'],
                'turnover': self.stats['turnover'],
                'by_exchange': dict(sorted(self.by_exchange.items()))
            }

    def clear(self) -> None:
        with self.lock:
            removed = len(self.receipts)
            self.receipts.clear()
            self.by_exchange.clear()
            for key in self.stats:
                self.stats[key] = 0
        logger.info(f"TradeJournal limpo: {removed} comprovantes removidos")

    def __len__(self) -> int:
        with self.lock:
            return len(self.receipts)
