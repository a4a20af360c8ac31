# Selection flows: criteria, scanning, dispatch, verification
