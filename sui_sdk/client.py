"""
SuiClient - Main client for the Sui JSON-RPC API.
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from pydantic import ValidationError

from .batch import BatchElement, execute_batch, type_adapter
from .coins import SUI_COIN_TYPE, coin_object_type, extract_coins
from .config import NetworkConfig
from .exceptions import ObjectFetchError, RpcError
from .models import (
    Coin, ExecuteTransactionRequestType, ExecuteTransactionResponse, ObjectInfo,
    ObjectRead, SignedTransaction, TransactionBytes, TransactionEffects,
    TransactionResponse
)
from ._rate_limited_log import rate_limited_log
from .transport import HttpTransport, RpcTransport

ObjectFilter = Callable[[ObjectInfo], bool]


class SuiClient:
    """
    Client for a Sui fullnode.

    This client handles:
    1. Single JSON-RPC calls and batches of calls in one round trip
    2. Reading objects and coin balances owned by an address
    3. Building unsigned transactions on the node

    Signing happens locally, see sui_sdk.signer.
    """

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        network: Optional[str] = None,
        transport: Optional[RpcTransport] = None,
        retry_count: int = 3,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the SuiClient

        Args:
            rpc_url: Fullnode JSON-RPC URL. Falls back to SUI_RPC_URL, then to
                the preset of ``network``
            network: Name of a bundled network preset (devnet, testnet, local)
            transport: Ready-made transport; rpc_url and retry_count are
                ignored when given
            retry_count: Number of retries for HTTP requests
            timeout: Timeout for requests in seconds (default: SUI_RPC_TIMEOUT or 30)
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ValueError: If the URL doesn't use https (unless it's localhost/127.0.0.1)
            ValueError: If the network name is unknown
        """
        self.logger = logger or logging.getLogger(__name__)
        self.timeout = timeout or NetworkConfig.get_timeout()

        if transport is None:
            rpc_url = rpc_url or NetworkConfig.get_rpc_url(network)
            transport = HttpTransport(rpc_url, timeout=self.timeout, retry_count=retry_count)
        self.rpc_url = rpc_url or getattr(transport, "rpc_url", None)
        self.transport = transport

    def __enter__(self) -> "SuiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying transport."""
        self.transport.close()

    # ------------------------------------------------------------------
    # Raw calls
    # ------------------------------------------------------------------

    def call(
        self,
        method: str,
        params: Optional[Sequence[Any]] = None,
        result_type: Any = Any,
        timeout: Optional[float] = None
    ) -> Any:
        """
        Make a single JSON-RPC call

        Args:
            method: RPC method name
            params: Positional parameters
            result_type: Type to decode the result into
            timeout: Request timeout override in seconds

        Returns:
            The decoded result

        Raises:
            TransportError: If the request could not be completed
            RpcError: If the node returned an error or an undecodable result
        """
        request = self.transport.new_request(method, list(params or []))
        reply = self.transport.send(request, timeout=timeout or self.timeout)

        error = reply.get("error")
        if error is not None:
            self.logger.debug(f"{method} returned error: {error}")
            if isinstance(error, dict):
                raise RpcError(
                    str(error.get("message", "unknown error")),
                    code=error.get("code"),
                    data=error.get("data")
                )
            raise RpcError(str(error))

        if "result" not in reply:
            raise RpcError(f"Reply to {method} carries neither result nor error")

        try:
            return type_adapter(result_type).validate_python(reply["result"])
        except ValidationError as e:
            self.logger.error(f"Could not decode {method} result: {e}")
            raise RpcError(f"Could not decode {method} result: {str(e)}") from e

    def batch_call(self, elements: Sequence[BatchElement], timeout: Optional[float] = None) -> None:
        """
        Execute several calls in one round trip.

        Every element ends up with either ``result`` or ``error`` set; see
        sui_sdk.batch.execute_batch.

        Raises:
            TransportError: If the round trip failed
        """
        execute_batch(self.transport, elements, timeout=timeout or self.timeout)

    def _batch_or_raise(self, elements: List[BatchElement]) -> None:
        self.batch_call(elements)
        for element in elements:
            if element.error is not None:
                raise element.error

    # ------------------------------------------------------------------
    # Object reads
    # ------------------------------------------------------------------

    def get_object(self, object_id: str) -> ObjectRead:
        return self.call("sui_getObject", [object_id], ObjectRead)

    def get_raw_object(self, object_id: str) -> ObjectRead:
        return self.call("sui_getRawObject", [object_id], ObjectRead)

    def get_objects_owned_by_address(self, address: str) -> List[ObjectInfo]:
        return self.call("sui_getObjectsOwnedByAddress", [address], List[ObjectInfo])

    def get_objects_owned_by_object(self, object_id: str) -> List[ObjectInfo]:
        return self.call("sui_getObjectsOwnedByObject", [object_id], List[ObjectInfo])

    def batch_get_object(self, object_ids: Sequence[str]) -> Dict[str, ObjectRead]:
        """
        Fetch several objects in one round trip.

        Returns:
            Mapping of object id to object read

        Raises:
            ElementError: If any of the reads failed
        """
        if not object_ids:
            return {}
        elements = [BatchElement("sui_getObject", [oid], ObjectRead) for oid in object_ids]
        self._batch_or_raise(elements)
        return {oid: e.result for oid, e in zip(object_ids, elements)}

    # ------------------------------------------------------------------
    # Object fetch pipeline
    # ------------------------------------------------------------------

    def list_filtered_objects(
        self,
        address: str,
        predicate: Optional[ObjectFilter] = None
    ) -> List[ObjectInfo]:
        """
        List objects owned by ``address`` that pass ``predicate``.

        Filtering is local, so no fetch is spent on unwanted objects.

        Raises:
            ObjectFetchError: If the listing call failed (phase ``listing``)
            TransportError: If the request could not be completed
        """
        try:
            infos = self.get_objects_owned_by_address(address)
        except RpcError as e:
            raise ObjectFetchError(f"listing objects of {address}: {e}", phase="listing") from e
        if predicate is None:
            return infos
        return [info for info in infos if predicate(info)]

    def batch_fetch_objects(
        self,
        infos: Sequence[ObjectInfo],
        timeout: Optional[float] = None
    ) -> List[ObjectRead]:
        """
        Fetch the full bodies of ``infos`` in one batch, keeping their order.

        Raises:
            ObjectFetchError: If any object read failed (phase ``fetch``)
            TransportError: If the round trip failed
        """
        if not infos:
            return []
        elements = [BatchElement("sui_getObject", [info.object_id], ObjectRead) for info in infos]
        self.batch_call(elements, timeout=timeout)
        for info, element in zip(infos, elements):
            if element.error is not None:
                raise ObjectFetchError(
                    f"fetching object {info.object_id}: {element.error}", phase="fetch"
                ) from element.error
        return [element.result for element in elements]

    def batch_get_filtered_objects_owned_by_address(
        self,
        address: str,
        predicate: Optional[ObjectFilter] = None
    ) -> List[ObjectRead]:
        """List the objects of ``address``, filter them, then batch-fetch the rest."""
        return self.batch_fetch_objects(self.list_filtered_objects(address, predicate))

    def batch_get_objects_owned_by_address(self, address: str, filter_type: str = "") -> List[ObjectRead]:
        """
        Fetch all objects of ``address`` whose type equals ``filter_type``.

        Args:
            address: Owner address
            filter_type: Exact object type to keep; empty keeps everything
        """
        filter_type = filter_type.strip()
        return self.batch_get_filtered_objects_owned_by_address(
            address,
            lambda info: filter_type == "" or info.type == filter_type
        )

    def get_coins_owned_by_address(
        self,
        address: str,
        coin_type: str = SUI_COIN_TYPE,
        strict: bool = False
    ) -> List[Coin]:
        """
        Get the coins of ``coin_type`` owned by ``address``

        Args:
            address: Owner address
            coin_type: Inner coin type, e.g. 0x2::sui::SUI
            strict: Raise on the first malformed coin object instead of
                skipping it

        Returns:
            Coins in listing order. Objects deleted between listing and fetch
            are left out.

        Raises:
            CoinExtractionError: If a coin object is malformed and either
                ``strict`` is set or no coin could be extracted at all
            ObjectFetchError: If listing or fetching failed
            TransportError: If a request could not be completed
        """
        object_type = coin_object_type(coin_type)
        objects = self.batch_get_objects_owned_by_address(address, object_type)
        outcome = extract_coins(objects, object_type)

        if outcome.errors:
            if strict or not outcome.coins:
                raise outcome.errors[0]
            rate_limited_log(
                f"Ignored {len(outcome.errors)} malformed {object_type} objects of {address}: "
                f"{outcome.errors[0]}",
                logger_instance=self.logger
            )
        if outcome.skipped:
            self.logger.info(
                f"{outcome.skipped} {object_type} objects of {address} disappeared before fetch"
            )
        return outcome.coins

    def get_sui_coins_owned_by_address(self, address: str) -> List[Coin]:
        return self.get_coins_owned_by_address(address, SUI_COIN_TYPE)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def get_total_transaction_number(self) -> int:
        return self.call("sui_getTotalTransactionNumber", [], int)

    def get_transactions_in_range(self, start: int, end: int) -> List[str]:
        return self.call("sui_getTransactionsInRange", [start, end], List[str])

    def get_transaction(self, digest: str) -> TransactionResponse:
        return self.call("sui_getTransaction", [digest], TransactionResponse)

    def batch_get_transaction(self, digests: Sequence[str]) -> Dict[str, TransactionResponse]:
        """
        Fetch several transactions in one round trip.

        Returns:
            Mapping of digest to transaction

        Raises:
            ElementError: If any of the reads failed
        """
        if not digests:
            return {}
        elements = [BatchElement("sui_getTransaction", [d], TransactionResponse) for d in digests]
        self._batch_or_raise(elements)
        return {d: e.result for d, e in zip(digests, elements)}

    def dry_run_transaction(self, tx: TransactionBytes) -> TransactionEffects:
        return self.call("sui_dryRunTransaction", [tx.tx_bytes], TransactionEffects)

    def execute_transaction(
        self,
        txn: SignedTransaction,
        request_type: ExecuteTransactionRequestType = ExecuteTransactionRequestType.WAIT_FOR_LOCAL_EXECUTION
    ) -> ExecuteTransactionResponse:
        """
        Submit a signed transaction

        Args:
            txn: Envelope from sui_sdk.signer.sign_transaction
            request_type: How long the node waits before answering

        Returns:
            The node's execution response
        """
        self.logger.info(f"Executing transaction ({request_type.value})")
        return self.call(
            "sui_executeTransaction",
            [txn.tx_bytes, txn.sig_scheme.value, txn.signature, txn.pub_key, request_type.value],
            ExecuteTransactionResponse
        )

    def batch_transaction(
        self,
        signer: str,
        txn_params: List[Dict[str, Any]],
        gas: Optional[str],
        gas_budget: int
    ) -> TransactionBytes:
        """Create an unsigned batched transaction."""
        return self.call(
            "sui_batchTransaction", [signer, txn_params, gas, gas_budget], TransactionBytes
        )

    def merge_coins(
        self,
        signer: str,
        primary_coin: str,
        coin_to_merge: str,
        gas: Optional[str],
        gas_budget: int
    ) -> TransactionBytes:
        """Create an unsigned transaction to merge multiple coins into one coin."""
        return self.call(
            "sui_mergeCoins", [signer, primary_coin, coin_to_merge, gas, gas_budget], TransactionBytes
        )

    def move_call(
        self,
        signer: str,
        package_id: str,
        module: str,
        function: str,
        type_args: List[str],
        arguments: List[Any],
        gas: Optional[str],
        gas_budget: int
    ) -> TransactionBytes:
        """
        Create an unsigned transaction to execute a Move call on the network,
        by calling the specified function in the module of a given package.
        """
        return self.call(
            "sui_moveCall",
            [signer, package_id, module, function, type_args, arguments, gas, gas_budget],
            TransactionBytes
        )

    def split_coin(
        self,
        signer: str,
        coin: str,
        split_amounts: List[int],
        gas: Optional[str],
        gas_budget: int
    ) -> TransactionBytes:
        """Create an unsigned transaction to split a coin object into multiple coins."""
        return self.call(
            "sui_splitCoin", [signer, coin, split_amounts, gas, gas_budget], TransactionBytes
        )

    def split_coin_equal(
        self,
        signer: str,
        coin: str,
        split_count: int,
        gas: Optional[str],
        gas_budget: int
    ) -> TransactionBytes:
        """Create an unsigned transaction to split a coin object into multiple equal-size coins."""
        return self.call(
            "sui_splitCoinEqual", [signer, coin, split_count, gas, gas_budget], TransactionBytes
        )

    def transfer_object(
        self,
        signer: str,
        recipient: str,
        object_id: str,
        gas: Optional[str],
        gas_budget: int
    ) -> TransactionBytes:
        """
        Create an unsigned transaction to transfer an object from one address
        to another. The object's type must allow public transfers.
        """
        return self.call(
            "sui_transferObject", [signer, object_id, gas, gas_budget, recipient], TransactionBytes
        )

    def transfer_sui(
        self,
        signer: str,
        recipient: str,
        sui_object_id: str,
        amount: int,
        gas_budget: int
    ) -> TransactionBytes:
        """
        Create an unsigned transaction to send SUI coin object to a Sui
        address. The SUI object is also used as the gas object.
        """
        return self.call(
            "sui_transferSui", [signer, sui_object_id, gas_budget, recipient, amount], TransactionBytes
        )

    def pay_all_sui(
        self,
        signer: str,
        recipient: str,
        input_coins: List[str],
        gas_budget: int
    ) -> TransactionBytes:
        """Create an unsigned transaction to send all SUI coins to one recipient."""
        return self.call(
            "sui_payAllSui", [signer, input_coins, recipient, gas_budget], TransactionBytes
        )
