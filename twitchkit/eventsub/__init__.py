"""EventSub models, replay protection, local dispatch, client builder and webhook verification."""