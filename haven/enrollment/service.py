import logging

from ..errors import NotFoundError, StorageError, ValidationError
from ..store import batches, enrollments, new_id, now_ms
from .proofs import proofs

logger = logging.getLogger(__name__)

COURSE_ID = 'english-language'
PAYMENT_WINDOW_MS = 30 * 24 * 60 * 60 * 1000


def list_batches():
    return batches.list_all()


def get_batch(batch_id):
    return batches.find(id=batch_id)


def create_batch(name, time_slot):
    name = (name or '').strip()
    time_slot = (time_slot or '').strip()
    if not name or not time_slot:
        raise ValidationError('Batch name and time slot are required')
    return batches.append({'id': new_id(), 'name': name, 'timeSlot': time_slot})


def get_enrollment_for_user(user_id):
    return enrollments.find(userId=user_id)


def enroll(user_id, batch_id, timing, method, proof=None, now=None):
    """Create the user's enrollment, or refresh the payment of an existing one.

    An existing enrollment keeps its original batchId and timing; only the
    payment sub-record is replaced.
    """
    if not batch_id or not timing or not method:
        raise ValidationError('Missing fields')

    proof_path = None
    if proof is not None:
        try:
            proof_path = proofs.save(proof)
        except StorageError:
            proof_path = None

    now = now_ms() if now is None else now
    payment = {'method': method, 'proof': proof_path, 'lastPaidAt': now}

    with enrollments.mutate() as records:
        existing = next((e for e in records if e.get('userId') == user_id), None)
        if existing is not None:
            existing['payment'] = payment
            record = existing
            logger.info(f"Updated payment for enrollment {existing['id']}")
        else:
            record = {
                'id': new_id(),
                'userId': user_id,
                'courseId': COURSE_ID,
                'batchId': batch_id,
                'timing': timing,
                'payment': payment,
            }
            records.append(record)
            logger.info(f"User {user_id} enrolled in batch {batch_id}")
    return record


def payment_status(enrollment, now=None):
    now = now_ms() if now is None else now
    last_paid = (enrollment.get('payment') or {}).get('lastPaidAt')
    if last_paid is None:
        return 'Pending'
    return 'Paid' if now - last_paid <= PAYMENT_WINDOW_MS else 'Pending'


def load_proof(user_id):
    enrollment = get_enrollment_for_user(user_id)
    payment = (enrollment or {}).get('payment') or {}
    if not payment.get('proof'):
        raise NotFoundError('No proof uploaded')
    return proofs.load(payment['proof'])
